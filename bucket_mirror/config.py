import os
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

from bucket_mirror.exceptions import ConfigError

DEFAULT_MAX_CONCURRENCY = 32
DEFAULT_LOG_LEVEL = "INFO"


class MirrorConfig(BaseModel):
    """Everything a mirror run needs, resolved once at process entry."""

    model_config = ConfigDict(frozen=True)

    bucket: str
    output_directory: Path  # absolute
    endpoint_url: Optional[str] = None
    access_key_id: Optional[str] = None
    secret_access_key: Optional[str] = None
    region: Optional[str] = None
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY
    log_level: str = DEFAULT_LOG_LEVEL
    log_file: Optional[str] = None


def _resolve_output_directory(raw: str, base: Optional[Path] = None) -> Path:
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = (base or Path.cwd()) / path
    return path.resolve()


def _parse_concurrency(raw: Optional[str]) -> int:
    if raw is None or not raw.strip():
        return DEFAULT_MAX_CONCURRENCY
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"MAX_CONCURRENCY must be an integer, got {raw!r}")
    if value < 1:
        raise ConfigError(f"MAX_CONCURRENCY must be at least 1, got {value}")
    return value


def load_config(
    environ: Optional[Mapping[str, str]] = None,
    base_dir: Optional[Path] = None,
    dotenv: bool = True,
) -> MirrorConfig:
    """Build a MirrorConfig from environment variables.

    Args:
        environ: Mapping to read from. Defaults to os.environ.
        base_dir: Directory a relative OUTPUT_DIRECTORY is resolved against.
                  Defaults to the current working directory.
        dotenv: Load a .env file into os.environ first (existing values win).

    Raises:
        ConfigError: If the output directory or bucket is missing, or
                     MAX_CONCURRENCY is not a positive integer.
    """
    if dotenv:
        load_dotenv()
    env = os.environ if environ is None else environ

    output_directory = env.get("OUTPUT_DIRECTORY")
    if not output_directory:
        raise ConfigError("OUTPUT_DIRECTORY is not set")

    bucket = env.get("S3_BUCKET") or env.get("BUCKET_NAME")
    if not bucket:
        raise ConfigError("S3_BUCKET is not set")

    return MirrorConfig(
        bucket=bucket,
        output_directory=_resolve_output_directory(output_directory, base_dir),
        endpoint_url=env.get("BUCKET_ENDPOINT") or None,
        access_key_id=env.get("BUCKET_ACCESS_ID") or None,
        secret_access_key=env.get("BUCKET_ACCESS_KEY") or None,
        region=env.get("BUCKET_REGION") or None,
        max_concurrency=_parse_concurrency(env.get("MAX_CONCURRENCY")),
        log_level=env.get("LOG_LEVEL", DEFAULT_LOG_LEVEL),
        log_file=env.get("LOG_FILE") or None,
    )
