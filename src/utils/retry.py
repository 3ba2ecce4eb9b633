"""
재시도 로직 유틸리티.

템플릿 다운로드의 일시적 실패(연결 끊김, 5xx) 재시도용.
영구 실패(404 등)는 exceptions에 포함하지 않아 즉시 전파.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RetryableError(Exception):
    """재시도 가능한 에러 (원인은 __cause__)."""

    pass


async def retry_with_exponential_backoff(
    func: Callable[..., Awaitable[T]],
    *,
    max_retries: int = 3,
    initial_delay: float = 1.0,
    max_delay: float = 30.0,
    exponential_base: float = 2.0,
    exceptions: tuple[type[Exception], ...] = (RetryableError,),
    **kwargs: Any,
) -> T:
    """
    지수 백오프를 사용한 재시도.

    Args:
        func: 재시도할 비동기 함수
        max_retries: 최대 재시도 횟수 (총 시도 = max_retries + 1)
        initial_delay: 초기 대기 시간(초)
        max_delay: 최대 대기 시간(초)
        exponential_base: 지수 백오프 기수
        exceptions: 재시도할 예외 타입들
        **kwargs: func에 전달할 키워드 인자

    Returns:
        func의 반환값

    Raises:
        마지막 시도에서 발생한 예외 (exceptions 외 예외는 즉시)
    """
    delay = initial_delay
    attempts = max_retries + 1

    for attempt in range(1, attempts + 1):
        try:
            result = await func(**kwargs)
        except exceptions as e:
            if attempt == attempts:
                logger.error(f"All {attempts} attempts failed. Last error: {e}")
                raise

            logger.warning(
                f"Attempt {attempt}/{attempts} failed: {e}. "
                f"Retrying in {delay:.1f}s..."
            )
            await asyncio.sleep(delay)
            delay = min(delay * exponential_base, max_delay)
            continue

        if attempt > 1:
            logger.info(f"Retry succeeded on attempt {attempt}/{attempts}")
        return result

    # range가 비지 않으므로 도달 불가
    msg = "Unexpected retry logic error"
    raise RuntimeError(msg)
