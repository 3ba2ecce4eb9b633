"""
Core layer: 설정 + 로깅.

역할:
- default.yaml + .env 설정 로드 (config.py)
- 로깅 설정 (logging.py)
"""

from .config import get_locks_dir, load_config
from .logging import configure_logging

__all__ = [
    # config
    "load_config",
    "get_locks_dir",
    # logging
    "configure_logging",
]
