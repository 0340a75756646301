#!/usr/bin/env python3
import argparse
import configparser
import os
import sys
import tempfile
import zipfile

from citport import utils
from citport.config import load_config
from citport.converter import convert_resource_pack
from citport.packs import open_pack, create_zip_from_directory


def build_parser():
    parser = argparse.ArgumentParser(
        prog="citport",
        description="Convert OptiFine CIT item overrides into custom_name select item models.",
    )
    parser.add_argument("--input", help="Resource pack directory or .zip (default: ./input)")
    parser.add_argument("--output", help="Output directory (default: ./output)")
    parser.add_argument("--zip", metavar="OUT_ZIP", help="Pack the converted resource pack into this zip instead of --output")
    parser.add_argument("--fallbacks", metavar="FILE", help="JSON object of extra item -> fallback model entries")
    parser.add_argument("--config", metavar="FILE", help="INI file with converter settings")
    parser.add_argument("--sort", dest="sort_entries", action="store_true", default=None,
                        help="Process directory entries sorted by name instead of listing order")
    parser.add_argument("--strict-markers", dest="strict_markers", action="store_true", default=None,
                        help="Only treat 'cit' as CIT when 'optifine' is a whole path segment")
    parser.add_argument("-v", "--verbose", action="store_true", default=None, help="Print per-file details")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    try:
        settings = load_config(args.config)
    except (OSError, ValueError, configparser.Error) as e:
        utils.error(f"Error reading config: {e}")
        return 1

    overrides = {
        key: value for key, value in (
            ("input", args.input),
            ("output", args.output),
            ("fallbacks", args.fallbacks),
            ("verbose", args.verbose),
            ("sort_entries", args.sort_entries),
            ("strict_markers", args.strict_markers),
        ) if value is not None
    }
    settings = settings._replace(**overrides)
    utils.set_verbose(settings.verbose)

    try:
        fallbacks = utils.FallbackTable.load(settings.fallbacks) if settings.fallbacks else utils.FallbackTable()
    except (OSError, ValueError) as e:
        utils.error(f"Error loading fallback table: {e}")
        return 1

    if not os.path.exists(settings.input):
        utils.error(f"Path does not exist: {settings.input}")
        return 1

    options = dict(fallbacks=fallbacks, sort_entries=settings.sort_entries, strict_markers=settings.strict_markers)
    try:
        with open_pack(settings.input) as source:
            if args.zip:
                with tempfile.TemporaryDirectory(prefix="citport_out_") as temp_out:
                    ok = convert_resource_pack(source, temp_out, **options)
                    ok = ok and create_zip_from_directory(temp_out, args.zip)
            else:
                ok = convert_resource_pack(source, settings.output, **options)
    except (OSError, zipfile.BadZipFile) as e:
        if utils.is_fatal(e):
            raise
        utils.error(f"Error opening resource pack {settings.input}: {e}")
        return 1

    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
