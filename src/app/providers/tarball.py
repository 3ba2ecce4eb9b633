"""
Tarball Fetch Provider (httpx).

원격 저장소의 tar.gz 아카이브를 받아 하위 디렉터리만 대상에 풀기.

흐름:
1. locator 파싱 (github/gitlab/bitbucket)
2. tarball 다운로드 (전송 오류/5xx만 재시도, 4xx는 즉시 실패)
3. 아카이브 루트 + subdir 접두어 제거 후 추출
   - 대상 밖으로 나가는 멤버는 거부
   - 일반 파일/디렉터리만 추출 (링크 등은 건너뜀)
"""

import io
import logging
import tarfile
from pathlib import Path, PurePosixPath

import httpx

from src.domain.errors import ErrorCodes
from src.utils.retry import RetryableError, retry_with_exponential_backoff

from .base import FetchError, TemplateFetcher, TemplateSource, parse_source

logger = logging.getLogger(__name__)

TARBALL_URLS = {
    "github": "https://codeload.github.com/{repo}/tar.gz/{ref}",
    "gitlab": "https://gitlab.com/{repo}/-/archive/{ref}.tar.gz",
    "bitbucket": "https://bitbucket.org/{repo}/get/{ref}.tar.gz",
}

USER_AGENT = "create-project"


def tarball_url(source: TemplateSource) -> str:
    """provider별 tarball URL."""
    return TARBALL_URLS[source.provider].format(repo=source.repo, ref=source.ref)


def _is_within(target: Path, base: Path) -> bool:
    try:
        target.relative_to(base)
        return True
    except ValueError:
        return False


class TarballFetcher(TemplateFetcher):
    """
    httpx 기반 tarball fetcher.

    Usage:
        fetcher = TarballFetcher(timeout=30.0)
        await fetcher.download("github:withastro/astro#examples/blog", force=True, cwd="my-app")
    """

    def __init__(
        self,
        timeout: float = 30.0,
        max_retries: int = 2,
        auth_token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        initial_delay: float = 1.0,
    ):
        """
        Args:
            timeout: HTTP 타임아웃 (초)
            max_retries: 전송 오류/5xx 재시도 횟수
            auth_token: Bearer 토큰 (비공개 저장소)
            transport: httpx transport (테스트용 MockTransport 주입)
            initial_delay: 첫 재시도 대기 (초)
        """
        self.timeout = timeout
        self.max_retries = max_retries
        self.auth_token = auth_token
        self.transport = transport
        self.initial_delay = initial_delay

    @classmethod
    def from_config(cls, config: dict) -> "TarballFetcher":
        fetch_config = config.get("fetch", {})
        return cls(
            timeout=fetch_config.get("timeout", 30.0),
            max_retries=fetch_config.get("max_retries", 2),
            auth_token=fetch_config.get("auth_token"),
        )

    def _headers(self) -> dict[str, str]:
        headers = {"User-Agent": USER_AGENT}
        if self.auth_token:
            headers["Authorization"] = f"Bearer {self.auth_token}"
        return headers

    async def download(
        self,
        locator: str,
        *,
        force: bool = False,
        cwd: str | Path = ".",
        dir: str = ".",
    ) -> Path:
        source = parse_source(locator)
        target = (Path(cwd) / dir).resolve()

        if target.exists() and any(target.iterdir()) and not force:
            raise FetchError(
                ErrorCodes.FETCH_TARGET_NOT_EMPTY,
                f"Destination {target} already exists and is not empty",
                target=str(target),
            )

        url = tarball_url(source)
        logger.debug(f"Downloading {locator} from {url}")

        data = await self._fetch_tarball(url)

        target.mkdir(parents=True, exist_ok=True)
        count = self._extract(data, source.subdir, target)
        logger.debug(f"Extracted {count} entries into {target}")

        return target

    # =========================================================================
    # Download
    # =========================================================================

    async def _fetch_tarball(self, url: str) -> bytes:
        """tarball 다운로드 (재시도 포함)."""
        async with httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=True,
            headers=self._headers(),
            transport=self.transport,
        ) as client:
            try:
                return await retry_with_exponential_backoff(
                    self._get,
                    max_retries=self.max_retries,
                    initial_delay=self.initial_delay,
                    exceptions=(httpx.TransportError, RetryableError),
                    client=client,
                    url=url,
                )
            except httpx.HTTPStatusError as e:
                raise FetchError(
                    ErrorCodes.FETCH_FAILED,
                    f"Failed to download {url} "
                    f"({e.response.status_code} {e.response.reason_phrase})",
                    url=url,
                    status_code=e.response.status_code,
                ) from e
            except RetryableError as e:
                cause = e.__cause__
                status_code = None
                if isinstance(cause, httpx.HTTPStatusError):
                    status_code = cause.response.status_code
                raise FetchError(
                    ErrorCodes.FETCH_FAILED,
                    f"Failed to download {url}: {e}",
                    url=url,
                    status_code=status_code,
                ) from e
            except httpx.TransportError as e:
                raise FetchError(
                    ErrorCodes.FETCH_FAILED,
                    f"Failed to download {url}: {e}",
                    url=url,
                ) from e

    async def _get(self, client: httpx.AsyncClient, url: str) -> bytes:
        response = await client.get(url)
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            # 5xx는 일시적일 수 있음 → 재시도
            if response.status_code >= 500:
                raise RetryableError(f"Server error {response.status_code}") from e
            raise
        return response.content

    # =========================================================================
    # Extract
    # =========================================================================

    def _extract(self, data: bytes, subdir: str, target: Path) -> int:
        """
        아카이브에서 subdir 아래 멤버만 target에 추출.

        아카이브 루트 디렉터리(<repo>-<ref>/)는 항상 제거.

        Returns:
            추출된 멤버 수

        Raises:
            FetchError: 아카이브 손상, 경로 탈출
        """
        prefix = PurePosixPath(subdir).parts if subdir else ()
        count = 0

        try:
            with tarfile.open(fileobj=io.BytesIO(data), mode="r:gz") as tar:
                for member in tar.getmembers():
                    parts = PurePosixPath(member.name).parts[1:]  # 루트 제거
                    if parts[: len(prefix)] != prefix:
                        continue
                    relative = parts[len(prefix):]
                    if not relative:
                        continue

                    dest = (target / PurePosixPath(*relative)).resolve()
                    if not _is_within(dest, target):
                        raise FetchError(
                            ErrorCodes.FETCH_UNSAFE_ARCHIVE,
                            f"Archive member escapes destination: {member.name}",
                            member=member.name,
                        )

                    if member.isdir():
                        dest.mkdir(parents=True, exist_ok=True)
                    elif member.isfile():
                        dest.parent.mkdir(parents=True, exist_ok=True)
                        extracted = tar.extractfile(member)
                        if extracted is None:
                            continue
                        with extracted:
                            dest.write_bytes(extracted.read())
                        dest.chmod(member.mode & 0o777 or 0o644)
                    else:
                        logger.debug(f"Skipping non-regular archive member: {member.name}")
                        continue
                    count += 1
        except (tarfile.TarError, EOFError, OSError) as e:
            raise FetchError(
                ErrorCodes.FETCH_FAILED,
                f"Failed to extract template archive: {e}",
            ) from e

        if count == 0 and prefix:
            raise FetchError(
                ErrorCodes.FETCH_FAILED,
                f"Subdirectory '{subdir}' not found in archive (404)",
                subdir=subdir,
                status_code=404,
            )

        return count
