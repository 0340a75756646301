import sys
import json
import errno
import collections.abc

VERBOSE = {"enabled": False}

# Vanilla items with a known fallback model; anything else falls back to
# minecraft:item/<name>.
DEFAULT_FALLBACK_MODELS = {
    "diamond_sword": "minecraft:item/diamond_sword",
    "iron_hoe": "minecraft:item/iron_hoe",
    "bow": "minecraft:item/bow",
}


def set_verbose(enabled):
    VERBOSE["enabled"] = bool(enabled)


def log(msg):
    print(msg)


def debug(msg):
    # only printed when verbose output was requested
    if VERBOSE["enabled"]:
        print(msg)


def error(msg):
    print(msg, file=sys.stderr)


def is_fatal(exc):
    """Errors that must abort the whole run instead of being skipped."""
    if isinstance(exc, MemoryError):
        return True
    return isinstance(exc, OSError) and exc.errno == errno.ENOSPC


class FallbackTable(collections.abc.MutableMapping):
    """Mapping of item base names to fallback model paths.

    Starts from DEFAULT_FALLBACK_MODELS unless ``defaults`` is given;
    ``entries`` are layered on top.
    """

    def __init__(self, entries=None, defaults=None):
        self.store = dict(DEFAULT_FALLBACK_MODELS if defaults is None else defaults)
        if entries:
            self.update(entries)

    @classmethod
    def load(cls, file_name, defaults=None):
        with open(file_name, "r", encoding="utf-8") as json_file:
            entries = json.load(json_file)
        if type(entries) is not dict:
            raise ValueError(f"Fallback table '{file_name}' must be a JSON object")
        for key, value in entries.items():
            if not isinstance(value, str):
                raise ValueError(f"Fallback for '{key}' in '{file_name}' must be a string")
        return cls(entries, defaults=defaults)

    def __getitem__(self, key):
        return self.store[self._keytransform(key)]

    def __setitem__(self, key, value):
        self.store[self._keytransform(key)] = value

    def __delitem__(self, key):
        del self.store[self._keytransform(key)]

    def __iter__(self):
        return iter(self.store)

    def __len__(self):
        return len(self.store)

    def _keytransform(self, key):
        return str(key)
