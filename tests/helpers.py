import asyncio
from pathlib import Path
from typing import Dict, Iterable, Optional

from botocore.exceptions import ClientError

from bucket_mirror.models import ObjectDescriptor


def client_error(code: str, operation: str) -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": code}}, operation)


def written_files(root: Path) -> Dict[str, bytes]:
    return {
        p.relative_to(root).as_posix(): p.read_bytes()
        for p in root.rglob("*") if p.is_file()
    }


class FakeBucket:
    """In-memory object store with the same surface as BucketClient."""

    def __init__(
        self,
        objects: Dict[str, bytes],
        fail_keys: Iterable[str] = (),
        list_error: Optional[Exception] = None,
        delay: float = 0.0,
        delays: Optional[Dict[str, float]] = None,
    ):
        self.objects = objects
        self.fail_keys = set(fail_keys)
        self.list_error = list_error
        self.delay = delay
        self.delays = delays or {}
        self.in_flight = 0
        self.max_in_flight = 0
        self.fetched = []

    async def list_objects(self, bucket: str):
        if self.list_error:
            raise self.list_error
        return [ObjectDescriptor(key=k, size=len(v)) for k, v in self.objects.items()]

    async def get_object(self, bucket: str, key: str) -> bytes:
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(key, self.delay))
            if key in self.fail_keys:
                raise client_error("NoSuchKey", "GetObject")
            self.fetched.append(key)
            return self.objects[key]
        finally:
            self.in_flight -= 1
