"""
Main entry point for bucket-mirror.

Reads configuration from the environment (and .env), mirrors the bucket
once, and exits:
- 0 when every object was written
- 1 when a pipeline stage failed
- 2 when the configuration is invalid
"""
import asyncio
import sys
import traceback

from bucket_mirror.app.pipeline import run_mirror
from bucket_mirror.config import load_config
from bucket_mirror.exceptions import ConfigError, MirrorError
from bucket_mirror.utils import get_logger, setup_logger

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_CONFIG = 2


def main() -> int:
    try:
        config = load_config()
    except ConfigError as e:
        setup_logger()
        logger.error(f"Invalid configuration: {e}")
        return EXIT_CONFIG

    setup_logger(level=config.log_level, log_file=config.log_file)

    try:
        asyncio.run(run_mirror(config))
    except ConfigError as e:
        logger.error(f"Invalid configuration: {e}")
        logger.debug(f"Traceback:\n{traceback.format_exc()}")
        return EXIT_CONFIG
    except MirrorError as e:
        logger.error(f"Mirror failed: {e}")
        logger.debug(f"Traceback:\n{traceback.format_exc()}")
        return EXIT_FAILED
    except KeyboardInterrupt:
        logger.info("Interrupted, partial output left in place")
        return EXIT_FAILED

    return EXIT_OK


def cli():
    sys.exit(main())


if __name__ == "__main__":
    cli()
