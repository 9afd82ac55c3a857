"""Walk a directory tree and yield the files worth dating, skipping hidden files and OS clutter."""

import os
import logging

from .errors import InvalidRoot

logger = logging.getLogger(__name__)

HIDDEN_PREFIX = '.'

# Files and folders that operating systems and photo managers drop next to photos
JUNK_NAMES = {
    '.DS_Store',
    '.localized',
    'Thumbs.db',
    'ehthumbs.db',
    'desktop.ini',
    'Icon\r',
    '__MACOSX',
}


def is_ignored(name):
    """Return True for dotfiles and known platform artifacts."""
    return name.startswith(HIDDEN_PREFIX) or name in JUNK_NAMES


def _log_walk_error(error):
    logger.warning(f"Cannot read directory {error.filename}: {error.strerror}")


def _walk(directory):
    for root, dirs, files in os.walk(directory, onerror=_log_walk_error):
        # prune in place so os.walk never descends into hidden folders
        dirs[:] = sorted(d for d in dirs if not is_ignored(d))
        for file in sorted(files):
            if is_ignored(file):
                continue
            file_path = os.path.join(root, file)
            if not os.path.isfile(file_path):
                logger.debug(f"Skipping non-regular file {file_path}")
                continue
            yield file_path


def walk_photos(directory):
    """Return a lazy iterator over the regular files under directory, in pre-order.

    The directory itself is checked right away and InvalidRoot is raised if it cannot
    be traversed.
    """
    if not os.path.exists(directory):
        raise InvalidRoot(directory, "no such file or directory")
    if not os.path.isdir(directory):
        raise InvalidRoot(directory, "not a directory")
    if not os.access(directory, os.R_OK | os.X_OK):
        raise InvalidRoot(directory, "permission denied")

    return _walk(directory)
