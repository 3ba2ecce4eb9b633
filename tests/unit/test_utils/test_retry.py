"""
test_retry.py - 지수 백오프 재시도 테스트

검증:
- 성공 시 즉시 반환
- 지정 예외만 재시도, 나머지는 즉시 전파
- 대기 시간 증가 / max_delay 상한
- 재시도 소진 시 마지막 예외
"""

from unittest.mock import AsyncMock, patch

import pytest

from src.utils.retry import RetryableError, retry_with_exponential_backoff


class Flaky:
    """처음 failures번 실패 후 성공."""

    def __init__(self, failures: int, error: Exception | None = None) -> None:
        self.failures = failures
        self.error = error or RetryableError("temporary")
        self.calls = 0

    async def __call__(self, **kwargs):
        self.calls += 1
        if self.calls <= self.failures:
            raise self.error
        return kwargs.get("value", "ok")


@pytest.fixture
def sleep():
    with patch("src.utils.retry.asyncio.sleep", new_callable=AsyncMock) as mocked:
        yield mocked


class TestRetryWithExponentialBackoff:
    """재시도 동작."""

    @pytest.mark.asyncio
    async def test_success_first_try(self, sleep):
        func = Flaky(0)

        result = await retry_with_exponential_backoff(func, value="done")

        assert result == "done"
        assert func.calls == 1
        sleep.assert_not_called()

    @pytest.mark.asyncio
    async def test_retries_then_succeeds(self, sleep):
        func = Flaky(2)

        result = await retry_with_exponential_backoff(func, max_retries=3, initial_delay=1.0)

        assert result == "ok"
        assert func.calls == 3
        assert [c.args[0] for c in sleep.await_args_list] == [1.0, 2.0]

    @pytest.mark.asyncio
    async def test_max_delay_cap(self, sleep):
        func = Flaky(4)

        await retry_with_exponential_backoff(
            func, max_retries=4, initial_delay=10.0, max_delay=15.0
        )

        assert [c.args[0] for c in sleep.await_args_list] == [10.0, 15.0, 15.0, 15.0]

    @pytest.mark.asyncio
    async def test_exhausted_raises_last(self, sleep):
        func = Flaky(10)

        with pytest.raises(RetryableError):
            await retry_with_exponential_backoff(func, max_retries=2)

        assert func.calls == 3

    @pytest.mark.asyncio
    async def test_other_exceptions_not_retried(self, sleep):
        func = Flaky(1, error=ValueError("permanent"))

        with pytest.raises(ValueError):
            await retry_with_exponential_backoff(func, max_retries=3)

        assert func.calls == 1
        sleep.assert_not_called()

    @pytest.mark.asyncio
    async def test_custom_exceptions(self, sleep):
        func = Flaky(1, error=ConnectionError("reset"))

        result = await retry_with_exponential_backoff(
            func, max_retries=1, exceptions=(ConnectionError,)
        )

        assert result == "ok"
        assert func.calls == 2

    @pytest.mark.asyncio
    async def test_zero_retries(self, sleep):
        func = Flaky(1)

        with pytest.raises(RetryableError):
            await retry_with_exponential_backoff(func, max_retries=0)

        assert func.calls == 1
