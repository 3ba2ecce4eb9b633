"""
Pytest fixtures for the provisioning tests.

테스트 구성:
- 가짜 fetch 협력자 (파일 쓰기 / 예외 발생)
- 메시지 기록용 messenger
- tar.gz 아카이브 생성 헬퍼
"""

import io
import tarfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pytest

from src.core.config import DEFAULT_CONFIG

# =============================================================================
# Helpers
# =============================================================================


def build_tarball(files: dict[str, str | bytes], root: str = "repo-main") -> bytes:
    """
    테스트용 tar.gz 생성.

    Args:
        files: {아카이브 내 상대 경로: 내용}
        root: 아카이브 루트 디렉터리 이름

    Returns:
        tar.gz 바이트
    """
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w:gz") as tar:
        root_info = tarfile.TarInfo(root)
        root_info.type = tarfile.DIRTYPE
        root_info.mode = 0o755
        tar.addfile(root_info)

        for name, content in files.items():
            data = content.encode("utf-8") if isinstance(content, str) else content
            info = tarfile.TarInfo(f"{root}/{name}")
            info.size = len(data)
            info.mode = 0o644
            tar.addfile(info, io.BytesIO(data))
    return buffer.getvalue()


# =============================================================================
# Fakes
# =============================================================================


class RecordingMessenger:
    """info/error 호출 기록."""

    def __init__(self) -> None:
        self.infos: list[tuple[str, str]] = []
        self.errors: list[tuple[str, Any]] = []

    def info(self, label: str, message: str) -> None:
        self.infos.append((label, message))

    def error(self, label: str, message: Any) -> None:
        self.errors.append((label, message))


class FakeFetcher:
    """
    download() 호출 시 files를 cwd에 쓰거나 error를 발생.

    calls: (locator, kwargs) 기록
    """

    def __init__(
        self,
        files: dict[str, str] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.files = files or {}
        self.error = error
        self.calls: list[tuple[str, dict[str, Any]]] = []

    async def download(self, locator: str, **kwargs: Any) -> Path:
        self.calls.append((locator, kwargs))
        target = Path(kwargs["cwd"]) / kwargs.get("dir", ".")
        if self.error is not None:
            raise self.error
        target.mkdir(parents=True, exist_ok=True)
        for name, content in self.files.items():
            path = target / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return target


@dataclass
class SimpleContext:
    """ProvisionContext 최소 구현."""

    cwd: str
    ref: str = "latest"
    package_manager: str = "npm"
    project_name: str | None = "new-app"
    dry_run: bool = False


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def messenger() -> RecordingMessenger:
    """메시지 기록용 messenger."""
    return RecordingMessenger()


@pytest.fixture
def config() -> dict:
    """기본 설정."""
    return {key: dict(value) for key, value in DEFAULT_CONFIG.items()}


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """
    tmp_path를 현재 디렉터리로.

    cwd 문자열 휴리스틱(".", "../") 테스트를 위해 상대 경로 사용.
    """
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def sample_readme() -> str:
    """마커 섹션 하나 + npm 명령이 있는 README."""
    return (
        "# Starter\n"
        "\n"
        "<!-- ASTRO:REMOVE:START -->\n"
        "Open this template in StackBlitz!\n"
        "<!-- ASTRO:REMOVE:END -->\n"
        "\n"
        "\n"
        "## Commands\n"
        "\n"
        "| `npm install` | Installs dependencies |\n"
        "| `npm run dev` | Starts local dev server |\n"
    )


@pytest.fixture
def make_tarball():
    """build_tarball 팩토리."""
    return build_tarball


@pytest.fixture
def make_fetcher():
    """FakeFetcher 팩토리."""
    return FakeFetcher


@pytest.fixture
def make_context():
    """SimpleContext 팩토리."""
    return SimpleContext
