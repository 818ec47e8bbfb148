"""
Filesystem infrastructure - Local mirror output.

Async directory creation and file writes under the output root.
"""

from bucket_mirror.infra.fs_infra.local_fs import (
    create_directory_recursive,
    destination_directory,
    directory_exists,
    resolve_destination,
    write_file,
)

__all__ = [
    'create_directory_recursive',
    'destination_directory',
    'directory_exists',
    'resolve_destination',
    'write_file',
]
