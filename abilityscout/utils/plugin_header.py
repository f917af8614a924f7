import logging
import os
import re

logger = logging.getLogger(__name__)

# plugin headers live in the first 8 KiB of the main plugin file
HEADER_BYTES = 8192

HEADER_FIELDS = {
    "name": "Plugin Name",
    "version": "Version",
    "author": "Author",
    "url": "Plugin URI",
}


def _header_value(text, header):
    match = re.search(r"^[ \t/*#@]*" + re.escape(header) + r":(.*)$", text, re.MULTILINE | re.IGNORECASE)
    if not match:
        return None
    value = re.sub(r"\s*(?:\*/|\?>).*$", "", match.group(1)).strip()
    return value or None


def read_plugin_info(root_dir):
    """Read the plugin header block from the top-level PHP file declaring one.

    Falls back to the directory name when no file carries a ``Plugin Name``.
    """
    info = {"name": os.path.basename(os.path.normpath(str(root_dir))), "version": None, "author": None, "url": None}
    try:
        entries = sorted(os.listdir(root_dir))
    except OSError:
        return info

    for fn in entries:
        path = os.path.join(root_dir, fn)
        if not fn.lower().endswith(".php") or not os.path.isfile(path) or os.path.islink(path):
            continue
        try:
            with open(path, "rb") as f:
                text = f.read(HEADER_BYTES).decode("utf-8", errors="replace")
        except OSError as e:
            logger.debug("Unable to read %s: %s", path, e)
            continue
        name = _header_value(text, HEADER_FIELDS["name"])
        if not name:
            continue
        info["name"] = name
        for key, header in HEADER_FIELDS.items():
            if key != "name":
                info[key] = _header_value(text, header)
        break
    return info
