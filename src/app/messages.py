"""
사용자 메시지 / 프롬프트 협력자.

코어는 직접 출력하지 않고 주입된 Messenger(info/error)를 통해 보고.
"""

import asyncio
import logging
import sys
from typing import Any, Protocol, TextIO

logger = logging.getLogger(__name__)

LABEL_WIDTH = 10


# =============================================================================
# Protocols (for dependency injection)
# =============================================================================


class Messenger(Protocol):
    """진행/에러 보고 인터페이스."""

    def info(self, label: str, message: str) -> None: ...

    def error(self, label: str, message: Any) -> None: ...


class Prompt(Protocol):
    """사용자 선택 인터페이스."""

    async def select(
        self,
        name: str,
        message: str,
        choices: list[dict[str, str]],
        initial: str | None = None,
    ) -> str:
        """
        선택지 중 하나 고르기.

        Args:
            name: 응답 키
            message: 질문
            choices: [{"value", "label", "hint"?}, ...]
            initial: 기본값 (빈 입력 시)

        Returns:
            선택된 value
        """
        ...


# =============================================================================
# Console Implementations
# =============================================================================


class ConsoleMessenger:
    """라벨 + 메시지를 터미널에 출력."""

    def __init__(self, stdout: TextIO | None = None, stderr: TextIO | None = None):
        self.stdout = stdout or sys.stdout
        self.stderr = stderr or sys.stderr

    def info(self, label: str, message: str) -> None:
        logger.debug(f"{label}: {message}")
        print(f"{label:>{LABEL_WIDTH}}  {message}", file=self.stdout)

    def error(self, label: str, message: Any) -> None:
        logger.debug(f"{label}: {message}")
        print(f"{label:>{LABEL_WIDTH}}  {message}", file=self.stderr)


class StdinPrompt:
    """번호 또는 value 입력으로 선택 (빈 입력 → initial)."""

    def __init__(self, stdin: TextIO | None = None, stdout: TextIO | None = None):
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout

    async def select(
        self,
        name: str,
        message: str,
        choices: list[dict[str, str]],
        initial: str | None = None,
    ) -> str:
        return await asyncio.to_thread(self._select_sync, message, choices, initial)

    def _select_sync(
        self,
        message: str,
        choices: list[dict[str, str]],
        initial: str | None,
    ) -> str:
        values = [c["value"] for c in choices]
        print(message, file=self.stdout)
        for i, choice in enumerate(choices, start=1):
            hint = f" {choice['hint']}" if choice.get("hint") else ""
            print(f"  {i}) {choice['label']}{hint}", file=self.stdout)

        while True:
            marker = f"[{initial}] > " if initial else "> "
            print(marker, end="", file=self.stdout, flush=True)
            line = self.stdin.readline()
            if not line:
                # EOF: 기본값 또는 첫 선택지
                return initial or values[0]

            answer = line.strip()
            if not answer and initial:
                return initial
            if answer.isdigit() and 1 <= int(answer) <= len(values):
                return values[int(answer) - 1]
            if answer in values:
                return answer
            print(f"Please choose 1-{len(values)}.", file=self.stdout)
