"""
Bucket-to-filesystem mirror pipeline.

Runs four stages in order, each one finishing before the next starts:
list the bucket, create the local directory tree, fetch every object,
write every object. The first failure in any stage aborts the run.
"""
import asyncio
from pathlib import Path
from typing import Awaitable, Callable, Iterable, List, Sequence, TypeVar

from bucket_mirror.config import DEFAULT_MAX_CONCURRENCY, MirrorConfig
from bucket_mirror.exceptions import DirectoryCreateError, FetchError, ListError, WriteError
from bucket_mirror.infra.bucket_infra import BucketClient
from bucket_mirror.infra.fs_infra import (
    create_directory_recursive,
    destination_directory,
    resolve_destination,
    write_file,
)
from bucket_mirror.models import FetchedFile, MirrorReport, ObjectDescriptor
from bucket_mirror.utils import get_logger

logger = get_logger(__name__)

T = TypeVar("T")
R = TypeVar("R")


async def _gather_bounded(
    worker: Callable[[T], Awaitable[R]],
    items: Iterable[T],
    max_concurrency: int,
) -> List[R]:
    """Run worker over items with at most max_concurrency in flight.

    The first exception cancels every sibling still pending or running and is
    re-raised; no partial results are returned.
    """
    semaphore = asyncio.Semaphore(max_concurrency)

    async def bounded(item: T) -> R:
        async with semaphore:
            return await worker(item)

    tasks = [asyncio.ensure_future(bounded(item)) for item in items]
    try:
        return await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


async def list_bucket_objects(client, bucket: str) -> List[ObjectDescriptor]:
    """Collect the full listing of a bucket.

    Args:
        client: Object store exposing ``list_objects(bucket)``
        bucket: Bucket name

    Raises:
        ListError: If the listing call fails or the bucket is inaccessible.
    """
    logger.info(f"Listing objects in bucket {bucket}...")
    try:
        descriptors = await client.list_objects(bucket)
    except Exception as e:
        raise ListError(f"Failed to list bucket {bucket}: {e}", bucket=bucket) from e

    logger.info(f"Found {len(descriptors)} object(s) in {bucket}")
    return descriptors


async def make_directory_tree(
    output_root: Path,
    descriptors: Sequence[ObjectDescriptor],
) -> Sequence[ObjectDescriptor]:
    """Ensure the parent directory of every key exists under output_root.

    Safe to run over an existing tree. Returns descriptors unchanged so the
    listing can be handed on to the fetch stage.

    Raises:
        DirectoryCreateError: On the first directory that cannot be created.
    """
    seen = set()
    created = 0
    for descriptor in descriptors:
        try:
            directory = destination_directory(output_root, descriptor.key)
        except ValueError as e:
            raise DirectoryCreateError(
                str(e), path=Path(output_root) / descriptor.key, key=descriptor.key
            ) from e

        if directory in seen:
            continue
        seen.add(directory)

        try:
            if await create_directory_recursive(directory):
                created += 1
                logger.debug(f"Created directory {directory}")
        except OSError as e:
            raise DirectoryCreateError(
                f"Failed to create directory {directory}: {e}", path=directory, key=descriptor.key
            ) from e

    logger.info(f"Directory tree ready under {output_root} ({created} created)")
    return descriptors


async def fetch_all_objects(
    client,
    bucket: str,
    descriptors: Sequence[ObjectDescriptor],
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
) -> List[FetchedFile]:
    """Download every non-directory object of the listing.

    Directory markers are skipped. Result order is not tied to input order.

    Raises:
        FetchError: If any single retrieval fails. Nothing is returned then.
    """
    files = [d for d in descriptors if not d.is_directory_marker]
    logger.info(
        f"Fetching {len(files)} object(s) from {bucket} "
        f"({len(descriptors) - len(files)} directory marker(s) skipped)"
    )

    async def fetch_one(descriptor: ObjectDescriptor) -> FetchedFile:
        try:
            data = await client.get_object(bucket, descriptor.key)
        except Exception as e:
            raise FetchError(
                f"Failed to fetch {descriptor.key} from {bucket}: {e}", key=descriptor.key
            ) from e
        logger.debug(f"Fetched {descriptor.key} ({len(data)} bytes)")
        return FetchedFile(filename=descriptor.key, data=data)

    return await _gather_bounded(fetch_one, files, max_concurrency)


async def write_all_to_files(
    output_root: Path,
    files: Sequence[FetchedFile],
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
) -> List[Path]:
    """Write every fetched file to join(output_root, filename).

    Existing files are overwritten. Files already written stay on disk if a
    sibling write fails.

    Raises:
        WriteError: If any single write fails.
    """
    logger.info(f"Writing {len(files)} file(s) to {output_root}...")

    async def write_one(fetched: FetchedFile) -> Path:
        path = None
        try:
            path = resolve_destination(output_root, fetched.filename)
            await write_file(path, fetched.data)
        except (ValueError, OSError) as e:
            raise WriteError(
                f"Failed to write {fetched.filename}: {e}", key=fetched.filename, path=path
            ) from e
        logger.debug(f"Wrote {path}")
        return path

    return await _gather_bounded(write_one, files, max_concurrency)


async def _run_stages(config: MirrorConfig, client) -> MirrorReport:
    output_root = config.output_directory

    descriptors = await list_bucket_objects(client, config.bucket)
    descriptors = await make_directory_tree(output_root, descriptors)
    fetched = await fetch_all_objects(client, config.bucket, descriptors, config.max_concurrency)
    written = await write_all_to_files(output_root, fetched, config.max_concurrency)

    return MirrorReport(
        bucket=config.bucket,
        output_directory=output_root,
        objects_listed=len(descriptors),
        directory_markers=sum(1 for d in descriptors if d.is_directory_marker),
        files_written=len(written),
        bytes_written=sum(len(f.data) for f in fetched),
    )


async def run_mirror(config: MirrorConfig, client=None) -> MirrorReport:
    """Mirror config.bucket into config.output_directory.

    Args:
        config: Resolved run configuration
        client: Object store to use. When None a BucketClient is opened from
                config for the duration of the run.

    Raises:
        MirrorError: The first stage failure. There is no retry; rerun the
                     whole pipeline to try again.
    """
    logger.info(f"Mirroring bucket {config.bucket} into {config.output_directory}")
    if client is None:
        async with BucketClient.from_config(config) as bucket_client:
            report = await _run_stages(config, bucket_client)
    else:
        report = await _run_stages(config, client)

    logger.info(
        f"Mirror complete: {report.files_written} file(s), "
        f"{report.bytes_written} bytes written to {report.output_directory}"
    )
    return report
