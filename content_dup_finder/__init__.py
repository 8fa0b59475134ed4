from .cli import cli
from .core import DuplicateGroup, find_duplicates, format_group
from .database import DigestIndex, open_index, backup_database
from .errors import (ScanError, TraversalError, FileReadError, DigestError,
                     StoreError, StoreOpenError, PipelineError)
from .pipeline import HashingPipeline, ScanStats, scan_directory
from .scanner import FileRecord, walk_files
from .utils import get_digest, encode_members, decode_members

__all__ = [
    'cli',
    'DuplicateGroup',
    'find_duplicates',
    'format_group',
    'DigestIndex',
    'open_index',
    'backup_database',
    'ScanError',
    'TraversalError',
    'FileReadError',
    'DigestError',
    'StoreError',
    'StoreOpenError',
    'PipelineError',
    'HashingPipeline',
    'ScanStats',
    'scan_directory',
    'FileRecord',
    'walk_files',
    'get_digest',
    'encode_members',
    'decode_members',
]
