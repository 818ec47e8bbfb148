from contextlib import AsyncExitStack
from typing import List, Optional

import aioboto3

from bucket_mirror.config import MirrorConfig
from bucket_mirror.exceptions import ConfigError
from bucket_mirror.models import ObjectDescriptor
from bucket_mirror.utils import get_logger

logger = get_logger(__name__)


class BucketClient:
    """Async S3 client scoped to an ``async with`` block.

    Works against AWS S3 or any S3-compatible endpoint (MinIO, SeaweedFS...).
    Credentials fall back to the default AWS chain when not given.
    """

    def __init__(
        self,
        endpoint_url: Optional[str] = None,
        access_key_id: Optional[str] = None,
        secret_access_key: Optional[str] = None,
        region: Optional[str] = None,
    ):
        self.endpoint_url = endpoint_url
        self.access_key_id = access_key_id
        self.secret_access_key = secret_access_key
        self.region = region
        self.client = None
        self._stack: Optional[AsyncExitStack] = None

    @classmethod
    def from_config(cls, config: MirrorConfig) -> "BucketClient":
        return cls(
            endpoint_url=config.endpoint_url,
            access_key_id=config.access_key_id,
            secret_access_key=config.secret_access_key,
            region=config.region,
        )

    async def __aenter__(self):
        kwargs = {}
        if self.endpoint_url:
            kwargs["endpoint_url"] = self.endpoint_url
        if self.access_key_id and self.secret_access_key:
            kwargs["aws_access_key_id"] = self.access_key_id
            kwargs["aws_secret_access_key"] = self.secret_access_key

        session = aioboto3.Session(region_name=self.region)
        self._stack = AsyncExitStack()
        logger.info(f"Opening S3 client (endpoint: {self.endpoint_url or 'default'})")
        try:
            self.client = await self._stack.enter_async_context(session.client("s3", **kwargs))
        except Exception as e:
            self._stack = None
            raise ConfigError(f"Could not open S3 client: {e}") from e
        return self

    async def __aexit__(self, exc_type, exc, tb):
        if self._stack:
            await self._stack.aclose()
            self._stack = None
            self.client = None
            logger.debug("S3 client closed.")

    async def list_objects(self, bucket: str) -> List[ObjectDescriptor]:
        """Return every object in the bucket, following continuation pages."""
        descriptors: List[ObjectDescriptor] = []
        paginator = self.client.get_paginator("list_objects_v2")
        async for page in paginator.paginate(Bucket=bucket):
            for obj in page.get("Contents", []):
                descriptors.append(
                    ObjectDescriptor(
                        key=obj["Key"],
                        size=obj.get("Size", 0),
                        etag=obj["ETag"].strip('"') if obj.get("ETag") else None,
                        last_modified=obj.get("LastModified"),
                    )
                )
        return descriptors

    async def get_object(self, bucket: str, key: str) -> bytes:
        response = await self.client.get_object(Bucket=bucket, Key=key)
        async with response["Body"] as stream:
            return await stream.read()
