"""
Template Fetch Provider 추상 인터페이스.

역할: locator → 원격 아카이브를 작업 디렉터리에 풀기
- 프로비저닝 코어는 download()만 호출 (내부 구현 모름)
- 실패는 FetchError: str(e)가 메시지, __cause__ 체인에 원인

locator 문법 (giget 스타일):
    [provider:]owner/repo[/sub/dir][#ref]

    github:withastro/astro#examples/blog
    github:withastro/astro/examples/blog#v4.0.0
    user/my-template          (provider 생략 → github)
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from src.domain.constants import DEFAULT_PROVIDER
from src.domain.errors import ErrorCodes

# =============================================================================
# Source
# =============================================================================

DEFAULT_REF = "main"

SUPPORTED_PROVIDERS = ("github", "gitlab", "bitbucket")

SOURCE_PATTERN = re.compile(
    r"^(?:(?P<provider>[a-z]+):)?"
    r"(?P<repo>[\w.-]+/[\w.-]+)"
    r"(?P<subdir>/[^#]*)?"
    r"(?:#(?P<ref>.+))?$"
)


@dataclass(frozen=True)
class TemplateSource:
    """파싱된 locator."""

    provider: str
    repo: str  # owner/name
    subdir: str = ""  # 저장소 내 하위 경로 ("" = 루트)
    ref: str = DEFAULT_REF

    @property
    def name(self) -> str:
        return self.repo.replace("/", "-")


class FetchError(Exception):
    """Fetch 관련 에러."""

    def __init__(self, code: str, message: str, **context: Any) -> None:
        self.code = code
        self.message = message
        self.context = context
        super().__init__(message)

    @property
    def status_code(self) -> int | None:
        return self.context.get("status_code")


def parse_source(locator: str) -> TemplateSource:
    """
    locator 파싱.

    Args:
        locator: 소스 문자열

    Returns:
        TemplateSource

    Raises:
        FetchError: 형식 오류 또는 지원하지 않는 provider
    """
    match = SOURCE_PATTERN.match(locator.strip())
    if not match:
        raise FetchError(
            ErrorCodes.FETCH_FAILED,
            f"Invalid template source: {locator}",
            locator=locator,
        )

    provider = match.group("provider") or DEFAULT_PROVIDER
    if provider not in SUPPORTED_PROVIDERS:
        raise FetchError(
            ErrorCodes.FETCH_UNSUPPORTED_PROVIDER,
            f"Unsupported provider: {provider}",
            locator=locator,
            provider=provider,
        )

    subdir = (match.group("subdir") or "").strip("/")
    return TemplateSource(
        provider=provider,
        repo=match.group("repo"),
        subdir=subdir,
        ref=match.group("ref") or DEFAULT_REF,
    )


# =============================================================================
# Abstract Fetcher
# =============================================================================

class TemplateFetcher(ABC):
    """
    Template Fetcher 추상 인터페이스.

    타임아웃/재시도는 구현체 책임 (코어는 관여 안 함).
    """

    @abstractmethod
    async def download(
        self,
        locator: str,
        *,
        force: bool = False,
        cwd: str | Path = ".",
        dir: str = ".",
    ) -> Path:
        """
        locator가 가리키는 템플릿을 cwd/dir에 풀기.

        Args:
            locator: 소스 문자열
            force: 대상 디렉터리가 비어있지 않아도 덮어쓰기
            cwd: 기준 디렉터리
            dir: cwd 기준 대상 디렉터리 ("." = cwd 자체, 중간 디렉터리 없음)

        Returns:
            템플릿이 풀린 디렉터리

        Raises:
            FetchError: 다운로드/압축 해제 실패
        """
        ...
