import json
import os
import shutil
from collections import Counter
from citport import utils
from citport.properties import read_properties_file, declaration_from_properties

CIT_DIRECTORY_NAME = "cit"
CIT_MARKER_SEGMENT = "optifine"
PROPERTIES_SUFFIX = ".properties"
ITEM_MODEL_PREFIX = "minecraft:item/"

# Helper functions

def list_entries(directory, sort_entries=False):
	"""List a directory in native order, or by name when sort_entries is set."""
	with os.scandir(directory) as it:
		entries = list(it)
	if sort_entries:
		entries.sort(key=lambda entry: entry.name)
	return entries

def base_item_name(item):
	"""minecraft:diamond_sword -> diamond_sword (bare names are kept as-is)."""
	return item.split(":", 1)[1] if ":" in item else item

def normalize_model_path(model):
	if model.startswith("./"):
		model = model[2:]
	return f"{ITEM_MODEL_PREFIX}{model}"

def is_cit_directory(name, relative_path, strict=False):
	"""
	Check whether a directory holds CIT declarations.

	relative_path is the parent's path relative to the pack root. By default
	the marker only has to appear somewhere in it as a substring, so a parent
	like "not_optifine_stuff" also counts; strict requires a whole segment.
	"""
	if name != CIT_DIRECTORY_NAME:
		return False
	if strict:
		return CIT_MARKER_SEGMENT in relative_path.replace("\\", "/").split("/")
	return CIT_MARKER_SEGMENT in relative_path

# Declaration aggregation

def add_declaration(item_groups, declaration):
	"""Append one case entry per item identifier of a declaration."""
	name = declaration.get("displayName") or declaration["texture"]
	model = normalize_model_path(declaration["model"])
	for item in declaration["items"].split(" "):
		if not item:
			utils.debug(f"  Ignoring empty item identifier in '{declaration['items']}'")
			continue
		item_groups.setdefault(item, []).append({"name": name, "model": model})
	return item_groups

def collect_item_groups(cit_dir, sort_entries=False):
	"""
	Group the declarations found directly inside a CIT directory by item.

	Returns a dict of item identifier -> list of case entries, in the order the
	declaration files were listed. Subdirectories are not searched.
	"""
	item_groups = {}
	for entry in list_entries(cit_dir, sort_entries):
		if not entry.name.endswith(PROPERTIES_SUFFIX):
			continue
		try:
			if not entry.is_file():
				continue
		except OSError as e:
			if utils.is_fatal(e):
				raise
			utils.error(f"Error reading {entry.path}: {e}")
			continue
		properties = read_properties_file(entry.path)
		if properties is None:
			continue
		add_declaration(item_groups, declaration_from_properties(properties, entry.name))
	return item_groups

# Select model generation

def get_fallback_model(base_item, fallbacks=None):
	"""Get the fallback model for an item base name."""
	if fallbacks is None:
		fallbacks = utils.DEFAULT_FALLBACK_MODELS
	return fallbacks.get(base_item, f"{ITEM_MODEL_PREFIX}{base_item}")

def create_select_model(item, cases, fallbacks=None):
	"""Build the custom_name select model for one item and its case entries."""
	return {
		"model": {
			"type": "minecraft:select",
			"property": "minecraft:component",
			"component": "minecraft:custom_name",
			"cases": [
				{"when": case["name"], "model": {"type": "minecraft:model", "model": case["model"]}}
				for case in cases
			],
			"fallback": {
				"type": "minecraft:model",
				"model": get_fallback_model(base_item_name(item), fallbacks)
			}
		}
	}

def model_output_path(output_root, item):
	return os.path.join(output_root, "assets", "minecraft", "models", "item", base_item_name(item) + ".json")

def write_select_model(output_root, item, cases, fallbacks=None):
	file_name = model_output_path(output_root, item)
	os.makedirs(os.path.dirname(file_name), exist_ok=True)
	if os.path.exists(file_name):
		utils.debug(f"  Overwriting existing model file {file_name}")
	with open(file_name, "w", encoding="utf-8") as f:
		json.dump(create_select_model(item, cases, fallbacks), f, indent=2, ensure_ascii=False)
	return file_name

# Tree walk

def copy_file(source_file, dest_file):
	try:
		shutil.copyfile(source_file, dest_file)
	except OSError as e:
		if utils.is_fatal(e):
			raise
		utils.error(f"Error copying file {source_file} to {dest_file}: {e}")
		return False
	return True

def process_cit_directory(cit_dir, output_root, fallbacks=None, sort_entries=False):
	"""Convert one CIT directory; returns the number of model files written."""
	try:
		item_groups = collect_item_groups(cit_dir, sort_entries)
	except OSError as e:
		if utils.is_fatal(e):
			raise
		utils.error(f"Error reading CIT directory {cit_dir}: {e}")
		return 0

	if not item_groups:
		utils.debug(f"  No item declarations in {cit_dir}")
		return 0

	written = 0
	for item, cases in item_groups.items():
		try:
			file_name = write_select_model(output_root, item, cases, fallbacks)
		except OSError as e:
			if utils.is_fatal(e):
				raise
			utils.error(f"Error writing model file for {item}: {e}")
			continue
		utils.log(f"  Created model file for {item} at {file_name}")
		written += 1
	return written

def process_directory(input_dir, output_root, root_dir, fallbacks=None, sort_entries=False, strict_markers=False):
	"""
	Mirror input_dir into output_root, diverting CIT directories.

	Returns a Counter with "copied", "generated" and "cit_directories" totals
	for this subtree.
	"""
	stats = Counter()
	relative_path = os.path.relpath(input_dir, root_dir)
	try:
		entries = list_entries(input_dir, sort_entries)
	except OSError as e:
		if utils.is_fatal(e):
			raise
		utils.error(f"Error reading directory {input_dir}: {e}")
		return stats

	for entry in entries:
		output_path = os.path.normpath(os.path.join(output_root, relative_path, entry.name))
		try:
			is_dir = entry.is_dir(follow_symlinks=False)
			is_linked_dir = not is_dir and entry.is_dir()
		except OSError as e:
			if utils.is_fatal(e):
				raise
			utils.error(f"Error reading {entry.path}: {e}")
			continue

		# symlinked directories can point back up the tree
		if is_linked_dir:
			utils.debug(f"  Skipping symlinked directory {entry.path}")
			continue
		if is_dir:
			if is_cit_directory(entry.name, relative_path, strict_markers):
				utils.log(f"Converting CIT directory: {os.path.join(relative_path, entry.name)}")
				stats["cit_directories"] += 1
				stats["generated"] += process_cit_directory(entry.path, output_root, fallbacks, sort_entries)
				continue
			try:
				os.makedirs(output_path, exist_ok=True)
			except OSError as e:
				if utils.is_fatal(e):
					raise
				utils.error(f"Error creating directory {output_path}: {e}")
				continue
			stats += process_directory(entry.path, output_root, root_dir, fallbacks, sort_entries, strict_markers)
		elif copy_file(entry.path, output_path):
			utils.debug(f"  Copied {entry.path}")
			stats["copied"] += 1
	return stats

# --- Core Conversion Function ---

def convert_resource_pack(source_pack_path: str, output_path: str, fallbacks=None, sort_entries=False, strict_markers=False):
	"""
	Converts the OptiFine CIT declarations of an extracted resource pack.

	Args:
		source_pack_path: Path to the extracted source resource pack directory.
		output_path: Path where the converted pack directory will be saved.
		fallbacks: Mapping of item base name to fallback model, defaults to
			utils.DEFAULT_FALLBACK_MODELS.
		sort_entries: Process directory entries by name instead of listing order.
		strict_markers: Require "optifine" to be a whole path segment.

	Returns:
		bool: True when the whole tree was walked, False on setup failure or
		an unexpected error.
	"""
	utils.log("Starting resource pack conversion...")
	utils.log(f"Source: {source_pack_path}")
	utils.log(f"Output: {output_path}")

	if not os.path.isdir(source_pack_path):
		utils.error(f"Error: Source directory '{source_pack_path}' not found or is not a directory.")
		return False

	try:
		os.makedirs(output_path, exist_ok=True)
	except OSError as e:
		utils.error(f"Error: Could not create output directory '{output_path}': {e}")
		return False

	try:
		stats = process_directory(source_pack_path, output_path, source_pack_path, fallbacks, sort_entries, strict_markers)
	except Exception as e:
		if utils.is_fatal(e):
			raise
		utils.error(f"Error during conversion: {e}")
		return False

	utils.log("\n--------------------")
	utils.log("Conversion Summary:")
	utils.log(f"- CIT Directories Converted: {stats['cit_directories']}")
	utils.log(f"- Model Files Generated: {stats['generated']}")
	utils.log(f"- Files Copied (Unchanged): {stats['copied']}")
	utils.log(f"- Output Location: {output_path}")
	utils.log("--------------------")
	utils.log("Conversion completed successfully!")
	return True
