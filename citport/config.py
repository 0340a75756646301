import configparser
from collections import namedtuple

Settings = namedtuple(
    "Settings",
    ["input", "output", "fallbacks", "verbose", "sort_entries", "strict_markers"],
)

DEFAULTS = Settings(
    input="./input",
    output="./output",
    fallbacks=None,
    verbose=False,
    sort_entries=False,
    strict_markers=False,
)


def load_config(path=None):
    """
    Read converter settings from the [DEFAULT] section of an INI file.

    Missing keys keep their DEFAULTS value; with no path the defaults are
    returned as-is.
    """
    if path is None:
        return DEFAULTS

    cfg = configparser.ConfigParser()
    with open(path, "r", encoding="utf-8") as f:
        cfg.read_file(f)
    section = cfg["DEFAULT"]

    try:
        return Settings(
            input=section.get("input", DEFAULTS.input),
            output=section.get("output", DEFAULTS.output),
            fallbacks=section.get("fallbacks", DEFAULTS.fallbacks) or None,
            verbose=section.getboolean("verbose", DEFAULTS.verbose),
            sort_entries=section.getboolean("sort_entries", DEFAULTS.sort_entries),
            strict_markers=section.getboolean("strict_markers", DEFAULTS.strict_markers),
        )
    except ValueError as e:
        raise ValueError(f"Invalid setting in {path}: {e}") from None
