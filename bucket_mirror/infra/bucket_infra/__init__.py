"""
Bucket infrastructure - Cloud storage operations.

Handles listing and object retrieval against S3-compatible storage (S3, MinIO, etc.)
"""

from bucket_mirror.infra.bucket_infra.client import BucketClient

__all__ = ['BucketClient']
