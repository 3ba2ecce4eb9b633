"""
로깅 설정.

규칙:
- 모듈마다 logger = logging.getLogger(__name__)
- 설정은 CLI 진입점에서 한 번만 (configure_logging)
- 사용자 메시지는 messenger 경유, 진단 정보는 logger
"""

import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def configure_logging(verbose: bool = False) -> None:
    """
    루트 로거 설정.

    Args:
        verbose: True면 DEBUG, 아니면 WARNING (messenger 출력과 중복 방지)
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
    )
    # httpx 요청 로그는 verbose일 때만
    logging.getLogger("httpx").setLevel(logging.INFO if verbose else logging.WARNING)
