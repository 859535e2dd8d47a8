"""Convenience functions for reading, writing and copying JSON data."""
from jsonutil.utils.copy_utils import JsonValue, copy, deep_copy, shallow_copy
from jsonutil.utils.file_utils import (
    dumps_json,
    loads_json,
    normalize_indent,
    read_file,
    read_file_async,
    read_file_sync,
    write_file,
    write_file_async,
    write_file_sync,
)


__all__ = [
    'JsonValue',
    'copy',
    'deep_copy',
    'shallow_copy',
    'dumps_json',
    'loads_json',
    'normalize_indent',
    'read_file',
    'read_file_async',
    'read_file_sync',
    'write_file',
    'write_file_async',
    'write_file_sync',
]
