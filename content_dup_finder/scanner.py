import os
from collections import namedtuple
from .config import logger
from .errors import TraversalError, FileReadError

FileRecord = namedtuple('FileRecord', ['path', 'content'])

SKIPPED_PREFIXES = ('.', '#')

def is_skipped_name(name):
    """Hidden entries and editor lock files are never scanned."""
    return name.startswith(SKIPPED_PREFIXES)

def is_skipped_path(absolute_path):
    """True if any component of an absolute path is hidden or transient."""
    return any(is_skipped_name(part) for part in absolute_path.split(os.sep) if part)

def read_file(path):
    with open(path, 'rb') as f:
        return f.read()

def _raise_traversal_error(error):
    raise TraversalError(f"Unable to read directory {error.filename}: {error.strerror}") from error

def walk_files(root, skip_unreadable=False):
    """Yield a FileRecord for every regular file below root.

    Paths are resolved to their canonical absolute form before filtering.
    A file that cannot be read raises FileReadError unless skip_unreadable
    is set, in which case it is logged and left out.
    """
    if not os.path.isdir(root):
        raise TraversalError(f"Scan root {root} is not a directory")

    for dirpath, _, filenames in os.walk(root, onerror=_raise_traversal_error):
        for filename in filenames:
            full_path = os.path.join(dirpath, filename)
            if not os.path.isfile(full_path):
                continue
            try:
                absolute_path = os.path.realpath(full_path)
            except OSError as e:
                raise TraversalError(f"Unable to resolve {full_path}: {e}") from e
            if is_skipped_path(absolute_path):
                continue

            try:
                content = read_file(absolute_path)
            except OSError as e:
                if skip_unreadable:
                    logger.warning(f"Unable to read file {absolute_path}: {e}")
                    continue
                raise FileReadError(f"Unable to read file {absolute_path}: {e}") from e
            yield FileRecord(absolute_path, content)
