from datetime import datetime
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict

DIRECTORY_SEPARATOR = "/"


class ObjectDescriptor(BaseModel):
    """One entry of a bucket listing."""

    model_config = ConfigDict(frozen=True)

    key: str
    size: int = 0
    etag: Optional[str] = None
    last_modified: Optional[datetime] = None

    @property
    def is_directory_marker(self) -> bool:
        # keys ending in the separator stand for folders, not content
        return self.key.endswith(DIRECTORY_SEPARATOR)


class FetchedFile(BaseModel):
    model_config = ConfigDict(frozen=True)

    filename: str
    data: bytes


class MirrorReport(BaseModel):
    bucket: str
    output_directory: Path
    objects_listed: int
    directory_markers: int
    files_written: int
    bytes_written: int
