import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

import pathspec

logger = logging.getLogger(__name__)


@dataclass
class WalkResult:
    files: List[str] = field(default_factory=list)
    total_files: int = 0
    truncated: bool = False


def load_gitignore(root_dir):
    gitignore_pth = Path(root_dir) / ".gitignore"
    try:
        gitign_pattern = gitignore_pth.read_text().splitlines() if gitignore_pth.is_file() else []
    except (OSError, UnicodeDecodeError):
        logger.warning("Unable to read %s, ignoring it", gitignore_pth)
        gitign_pattern = []
    return pathspec.PathSpec.from_lines("gitwildmatch", gitign_pattern)


def find_source_files(root_dir, config) -> WalkResult:
    """Collect candidate source files under ``root_dir`` in a stable order.

    Excluded directory names are matched case-insensitively and symlinks are
    never followed. When more than ``config.max_files`` files are found only
    the first ``max_files`` are kept and the result is marked truncated.
    """
    result = WalkResult()
    if not os.path.isdir(root_dir):
        logger.warning("Scan root %s is not a readable directory", root_dir)
        return result

    excluded = {d.lower() for d in config.excluded_dirs}
    extensions = tuple(e.lower() for e in config.file_extensions)
    spec = load_gitignore(root_dir) if config.respect_gitignore else None

    def _on_error(err):
        logger.debug("Skipping unreadable directory: %s", err)

    files = []
    for dirpath, dirnames, filenames in os.walk(root_dir, onerror=_on_error):
        rel_dir = os.path.relpath(dirpath, root_dir)
        kept = []
        for d in sorted(dirnames):
            if d.lower() in excluded:
                continue
            if os.path.islink(os.path.join(dirpath, d)):
                continue
            if spec is not None and spec.match_file(_rel(rel_dir, d) + "/"):
                continue
            kept.append(d)
        dirnames[:] = kept

        for fn in sorted(filenames):
            if not fn.lower().endswith(extensions):
                continue
            full = os.path.join(dirpath, fn)
            if os.path.islink(full) or not os.path.isfile(full):
                continue
            if spec is not None and spec.match_file(_rel(rel_dir, fn)):
                continue
            files.append(full)

    result.total_files = len(files)
    if len(files) > config.max_files:
        logger.info("Found %d files under %s, scanning the first %d", len(files), root_dir, config.max_files)
        files = files[:config.max_files]
        result.truncated = True
    result.files = files
    return result


def _rel(rel_dir, name):
    if rel_dir == ".":
        return name
    return f"{rel_dir}/{name}".replace(os.sep, "/")
