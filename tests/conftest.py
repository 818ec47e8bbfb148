import logging
from pathlib import Path

import pytest

from bucket_mirror.config import load_config
from bucket_mirror.utils import ROOT_LOGGER_NAME


@pytest.fixture
def make_config(tmp_path: Path):
    def _make(**env):
        environ = {"OUTPUT_DIRECTORY": "out", "S3_BUCKET": "test-bucket"}
        environ.update({k: str(v) for k, v in env.items()})
        return load_config(environ=environ, base_dir=tmp_path, dotenv=False)
    return _make


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
