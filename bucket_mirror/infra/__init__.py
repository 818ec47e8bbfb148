"""
Infrastructure layer - External dependencies and adapters.

This package contains all infrastructure-related modules:
- bucket_infra: Cloud storage (S3/MinIO) listing and retrieval
- fs_infra: Local filesystem directory creation and writes
"""
