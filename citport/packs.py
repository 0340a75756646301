import os
import zipfile
import tempfile
import contextlib
from citport import utils


@contextlib.contextmanager
def open_pack(pack_path):
    """
    Yield a directory holding the resource pack at pack_path.

    Zip packs are extracted to a temporary directory that is removed when the
    context exits; directories are yielded unchanged.
    """
    if os.path.isfile(pack_path) and zipfile.is_zipfile(pack_path):
        with tempfile.TemporaryDirectory(prefix="citport_unpack_") as temp_dir:
            with zipfile.ZipFile(pack_path, "r") as z:
                z.extractall(temp_dir)
            utils.debug(f"Extracted {pack_path} to {temp_dir}")
            yield temp_dir
    else:
        yield pack_path


def create_zip_from_directory(input_dir, output_zip):
    """
    Creates a ZIP file from the contents of a directory.

    Args:
        input_dir (str): Path to the directory to be zipped
        output_zip (str): Path where the ZIP file will be saved

    Returns:
        bool: True if successful, False otherwise
    """
    if not os.path.isdir(input_dir):
        utils.error(f"Error: Directory '{input_dir}' does not exist")
        return False

    try:
        parent = os.path.dirname(os.path.abspath(output_zip))
        os.makedirs(parent, exist_ok=True)
        with zipfile.ZipFile(output_zip, "w", zipfile.ZIP_DEFLATED) as zipf:
            for root, dirs, files in os.walk(input_dir):
                dirs.sort()
                for file in sorted(files):
                    file_path = os.path.join(root, file)
                    # zip entries always use forward slashes
                    arcname = os.path.relpath(file_path, input_dir).replace(os.sep, "/")
                    zipf.write(file_path, arcname)
    except OSError as e:
        if utils.is_fatal(e):
            raise
        utils.error(f"Error creating ZIP file: {e}")
        return False

    utils.log(f"Successfully created ZIP file: {output_zip}")
    return True
