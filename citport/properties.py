import os
from citport import utils

DISPLAY_NAME_KEY = "nbt.display.Name"

# OptiFine name matchers that have no meaning for an exact custom_name match
NAME_PATTERN_PREFIXES = ("ipattern:", "pattern:")


def parse_properties(text):
	"""
	Parse the text of a CIT .properties file.

	Returns the key/value mapping when it declares an item override
	(``type=item`` with a non-empty ``items``), otherwise None.
	"""
	properties = {}
	for line in text.split("\n"):
		line = line.strip()
		if not line or line.startswith("#") or "=" not in line:
			continue
		key, value = line.split("=", 1)
		key, value = key.strip(), value.strip()
		if key and value:
			properties[key] = value

	if properties.get("type") == "item" and properties.get("items"):
		return properties
	return None


def read_properties_file(file_path):
	"""Read and parse one declaration file; unreadable files count as invalid."""
	try:
		with open(file_path, "r", encoding="utf-8-sig", errors="replace") as f:
			content = f.read()
	except OSError as e:
		if utils.is_fatal(e):
			raise
		utils.error(f"Error parsing properties file {file_path}: {e}")
		return None

	properties = parse_properties(content)
	if properties is None:
		utils.debug(f"  Skipping {file_path}: not an item declaration")
	return properties


def strip_name_pattern(value):
	for prefix in NAME_PATTERN_PREFIXES:
		if value.startswith(prefix):
			return value[len(prefix):]
	return value


def declaration_from_properties(properties, file_name):
	"""Fill in the defaults of a parsed declaration.

	texture falls back to the file's base name and model to texture.
	"""
	texture = properties.get("texture") or os.path.splitext(file_name)[0]
	declaration = {
		"type": properties["type"],
		"items": properties["items"],
		"texture": texture,
		"model": properties.get("model") or texture,
	}
	if DISPLAY_NAME_KEY in properties:
		declaration["displayName"] = strip_name_pattern(properties[DISPLAY_NAME_KEY])
	return declaration
