import os
from pathlib import Path
from typing import Union

import aiofiles
import aiofiles.os

PathLike = Union[str, Path]


def _join_key(root: str, key: str) -> str:
    # keys are relative to the bucket root even when they start with "/"
    return os.path.join(root, key.lstrip("/"))


def _inside_root(root: str, path: str, key: str) -> Path:
    normalized = os.path.normpath(path)
    if os.path.commonpath([root, normalized]) != root:
        raise ValueError(f"Key {key!r} resolves outside {root}")
    return Path(normalized)


def resolve_destination(output_root: PathLike, key: str) -> Path:
    """Join a bucket key onto the output root.

    A leading ``/`` on the key is dropped, so ``/logs/x.txt`` lands at
    ``<root>/logs/x.txt``.

    Raises:
        ValueError: If ``..`` segments climb above the output root.
    """
    root = os.path.normpath(os.fspath(output_root))
    return _inside_root(root, _join_key(root, key), key)


def destination_directory(output_root: PathLike, key: str) -> Path:
    """Directory portion of join(output_root, key).

    A directory marker such as ``a/`` yields ``<root>/a`` itself, since the
    trailing separator is kept until dirname is taken.

    Raises:
        ValueError: If ``..`` segments climb above the output root.
    """
    root = os.path.normpath(os.fspath(output_root))
    return _inside_root(root, os.path.dirname(_join_key(root, key)), key)


async def directory_exists(path: PathLike) -> bool:
    return await aiofiles.os.path.isdir(path)


async def create_directory_recursive(path: PathLike) -> bool:
    """Create path and any missing parents. Returns False if it already existed."""
    if await directory_exists(path):
        return False
    await aiofiles.os.makedirs(path, exist_ok=True)
    return True


async def write_file(path: PathLike, data: bytes) -> int:
    """Create or overwrite path with data, returning the number of bytes written."""
    async with aiofiles.open(path, "wb") as f:
        await f.write(data)
    return len(data)
