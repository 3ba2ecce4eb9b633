"""
템플릿 프로비저닝: 다운로드 → README 정규화 → 후처리 → (실패 시) 정리 + 분류.

상태:
    Idle → Fetching → Success → PostProcessing → Done
                    → Failure → Cleanup → Failed

규칙:
- dry-run: 파일시스템/네트워크 작업 없음
- fetch 실패: 우리가 만들었을 법한 디렉터리만 정리 시도, 정리 에러는 폐기
- 404 → TemplateNotFoundError, 그 외 → 원인 체인 보고 후 TemplateDownloadError
- 후처리(삭제/갱신)는 동시 실행, 첫 실패 전파
- 같은 디렉터리에 대한 동시 프로비저닝은 파일 락으로 차단
"""

import asyncio
import hashlib
import logging
import os
import shutil
from collections.abc import AsyncGenerator, Sequence
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol

from filelock import FileLock, Timeout

from src.domain.constants import README_FILENAME
from src.domain.errors import (
    ErrorCodes,
    ProvisionLockError,
    TemplateDownloadError,
    TemplateNotFoundError,
)

from .locator import resolve_from_config
from .readme import process_template_readme
from .rules import REMOVAL_RULES, UPDATE_RULES, FileTransformRule, RuleKind

logger = logging.getLogger(__name__)

# 원인 체인 최대 깊이 (cause, cause.cause)
MAX_CAUSE_DEPTH = 2

NOT_FOUND_SIGNAL = "404"


# =============================================================================
# Collaborator Protocols (for dependency injection)
# =============================================================================


class TemplateDownloader(Protocol):
    """외부 fetch 협력자."""

    async def download(
        self,
        locator: str,
        *,
        force: bool = False,
        cwd: str | Path = ".",
        dir: str = ".",
    ) -> Any: ...


class Reporter(Protocol):
    """진행/에러 보고."""

    def info(self, label: str, message: str) -> None: ...

    def error(self, label: str, message: Any) -> None: ...


class ProvisionContext(Protocol):
    """프로비저닝에 필요한 컨텍스트 필드 (읽기 전용)."""

    cwd: str
    ref: str
    package_manager: str
    project_name: str | None
    dry_run: bool


# =============================================================================
# Result
# =============================================================================


@dataclass
class ProvisionResult:
    """프로비저닝 결과."""

    template: str
    locator: str | None = None
    skipped: bool = False
    readme_processed: bool = False
    removed: list[str] = field(default_factory=list)
    updated: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "template": self.template,
            "locator": self.locator,
            "skipped": self.skipped,
            "readme_processed": self.readme_processed,
            "removed": self.removed,
            "updated": self.updated,
        }


# =============================================================================
# Helpers
# =============================================================================


def is_probably_created_by_us(cwd: str) -> bool:
    """
    실패 시 정리해도 되는 디렉터리인지 (휴리스틱).

    현재 디렉터리(".", "./")나 상위로 빠지는 경로("../")는
    사용자가 직접 지정한 기존 디렉터리일 수 있으므로 제외.
    """
    return cwd not in (".", "./") and not cwd.startswith("../")


def collect_error_causes(error: BaseException, max_depth: int = MAX_CAUSE_DEPTH) -> list[Any]:
    """
    에러의 원인 체인 수집 (최대 max_depth 단계).

    __cause__ 우선, 없으면 cause 속성.
    """
    causes: list[Any] = []
    current: Any = error
    for _ in range(max_depth):
        cause = getattr(current, "__cause__", None)
        if cause is None:
            cause = getattr(current, "cause", None)
        if cause is None:
            break
        causes.append(cause)
        current = cause
    return causes


def is_not_found_error(error: BaseException) -> bool:
    """메시지에 404 신호가 있는지."""
    return NOT_FOUND_SIGNAL in str(error)


# =============================================================================
# Provisioner
# =============================================================================


class TemplateProvisioner:
    """
    템플릿 다운로드 + 정규화 오케스트레이터.

    Usage:
        provisioner = TemplateProvisioner(fetcher, messenger, config)
        result = await provisioner.provision("blog", ctx)
    """

    # 락 timeout (초)
    LOCK_TIMEOUT = 10.0

    def __init__(
        self,
        fetcher: TemplateDownloader,
        reporter: Reporter,
        config: dict[str, Any] | None = None,
        locks_dir: Path | None = None,
        removal_rules: Sequence[FileTransformRule] = REMOVAL_RULES,
        update_rules: Sequence[FileTransformRule] = UPDATE_RULES,
    ):
        """
        Args:
            fetcher: download() 협력자
            reporter: info/error 보고 협력자
            config: 설정 (templates, provision 섹션)
            locks_dir: 락 파일 디렉터리 (None이면 락 사용 안 함)
            removal_rules: 다운로드 후 삭제 규칙
            update_rules: 다운로드 후 갱신 규칙
        """
        self.fetcher = fetcher
        self.reporter = reporter
        self.config = config or {}
        self.locks_dir = locks_dir
        self.removal_rules = tuple(removal_rules)
        self.update_rules = tuple(update_rules)
        self.lock_timeout = self.config.get("provision", {}).get(
            "lock_timeout", self.LOCK_TIMEOUT
        )

    def lock_path(self, cwd: str) -> Path | None:
        """작업 디렉터리의 락 파일 경로 (절대 경로 해시)."""
        if self.locks_dir is None:
            return None
        key = hashlib.sha256(str(Path(cwd).resolve()).encode()).hexdigest()[:16]
        return self.locks_dir / f"{key}.lock"

    @asynccontextmanager
    async def _directory_lock(self, cwd: str) -> AsyncGenerator[None, None]:
        """
        작업 디렉터리별 락.

        락 파일은 프로젝트 밖(locks_dir)에 두어 결과물에 섞이지 않게 함.
        대기는 워커 스레드에서 (이벤트 루프 차단 없음).

        Raises:
            ProvisionLockError: PROVISION_LOCK_TIMEOUT
        """
        if self.locks_dir is None:
            yield
            return

        self.locks_dir.mkdir(parents=True, exist_ok=True)
        # 획득(워커 스레드)과 해제(루프 스레드)가 다른 스레드
        lock = FileLock(self.lock_path(cwd), timeout=self.lock_timeout, thread_local=False)

        try:
            await asyncio.to_thread(lock.acquire)
        except Timeout:
            raise ProvisionLockError(
                ErrorCodes.PROVISION_LOCK_TIMEOUT,
                f"Another provisioning run is using {cwd}",
                cwd=cwd,
                timeout=self.lock_timeout,
            )

        try:
            yield
        finally:
            lock.release()

    # =========================================================================
    # Provision
    # =========================================================================

    async def provision(self, template: str, ctx: ProvisionContext) -> ProvisionResult:
        """
        템플릿 다운로드 및 정규화.

        Args:
            template: 템플릿 식별자
            ctx: cwd, ref, package_manager, project_name, dry_run

        Returns:
            ProvisionResult

        Raises:
            TemplateNotFoundError: 원격에 템플릿 없음
            TemplateDownloadError: 그 외 다운로드 실패
            ProvisionLockError: 다른 실행이 같은 디렉터리 사용 중
            OSError 등: 후처리 중 I/O 실패 (그대로 전파)
        """
        result = ProvisionResult(template=template)

        if ctx.dry_run:
            self.reporter.info("--dry-run", "Skipping template copying")
            result.skipped = True
            return result

        result.locator = resolve_from_config(template, ctx.ref, self.config)
        logger.debug(f"Resolved template {template} -> {result.locator}")

        async with self._directory_lock(ctx.cwd):
            try:
                await self.fetcher.download(
                    result.locator,
                    force=True,
                    cwd=ctx.cwd,
                    dir=".",
                )
                result.readme_processed = self._process_readme(ctx)
            except Exception as e:
                self._cleanup(ctx.cwd)
                raise self._classify(template, e) from e

            removed, updated = await asyncio.gather(
                self._apply_rules(self.removal_rules, ctx),
                self._apply_rules(self.update_rules, ctx),
            )

        result.removed = removed
        result.updated = updated
        return result

    def _process_readme(self, ctx: ProvisionContext) -> bool:
        """README.md 정규화 (없으면 건너뜀)."""
        readme_path = Path(ctx.cwd) / README_FILENAME
        if not readme_path.exists():
            return False

        readme = readme_path.read_text(encoding="utf-8")
        readme_path.write_text(
            process_template_readme(readme, ctx.package_manager),
            encoding="utf-8",
        )
        return True

    # =========================================================================
    # Failure Recovery
    # =========================================================================

    def _cleanup(self, cwd: str) -> None:
        """
        부분 생성된 디렉터리 정리 (best-effort).

        빈 디렉터리만 삭제. 어떤 에러든 폐기하여 원래 에러가 보이게 함.
        """
        if not is_probably_created_by_us(cwd):
            return

        try:
            os.rmdir(cwd)
            logger.debug(f"Removed partially created directory: {cwd}")
        except Exception as e:
            logger.debug(f"Cleanup of {cwd} skipped: {e}")

    def _classify(self, template: str, error: Exception) -> Exception:
        """fetch 에러 → 사용자용 에러."""
        if is_not_found_error(error):
            return TemplateNotFoundError(template)

        message = str(error)
        if message:
            self.reporter.error("error", message)
        for cause in collect_error_causes(error):
            self.reporter.error("error", cause)

        return TemplateDownloadError(template, reason=message)

    # =========================================================================
    # Post-processing
    # =========================================================================

    async def _apply_rules(
        self,
        rules: Sequence[FileTransformRule],
        ctx: ProvisionContext,
    ) -> list[str]:
        """규칙 세트 동시 적용. 적용된 경로 목록 반환."""
        overrides = {"name": ctx.project_name}
        applied = await asyncio.gather(
            *(asyncio.to_thread(self._apply_rule, rule, Path(ctx.cwd), overrides) for rule in rules)
        )
        return [path for path in applied if path is not None]

    def _apply_rule(
        self,
        rule: FileTransformRule,
        cwd: Path,
        overrides: dict[str, Any],
    ) -> str | None:
        """
        단일 규칙 적용 (대상 없으면 None).

        심볼릭 링크는 따라가지 않음: 삭제는 링크 자체, 링크된 파일은 갱신하지 않음.
        """
        target = cwd / rule.path
        if not (target.exists() or target.is_symlink()):
            return None

        if rule.kind is RuleKind.DELETE:
            if target.is_dir() and not target.is_symlink():
                shutil.rmtree(target)
            else:
                target.unlink()
            logger.debug(f"Removed {target}")
        elif target.is_symlink():
            logger.debug(f"Skipped symlinked {target}")
            return None
        else:
            contents = target.read_text(encoding="utf-8")
            target.write_text(rule.apply(contents, overrides), encoding="utf-8")
            logger.debug(f"Updated {target}")

        return rule.path
