"""
bucket-mirror: copy an object-storage bucket onto the local filesystem,
recreating its key hierarchy as nested directories.
"""

from bucket_mirror.app.pipeline import run_mirror
from bucket_mirror.config import MirrorConfig, load_config

__all__ = ['MirrorConfig', 'load_config', 'run_mirror']
