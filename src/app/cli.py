"""
create-project CLI 진입점.

사용법:
    # 대화형 (템플릿 선택 프롬프트)
    create-project my-app

    # 기본 템플릿, 프롬프트 없음
    create-project my-app --yes

    # 특정 템플릿/버전, pnpm 기준 README
    create-project my-app --template blog --ref v4.0.0 --package-manager pnpm

    # docs 템플릿 / third-party 템플릿
    create-project docs --template starlight/tailwind
    create-project my-app --template someuser/sometemplate

    # 아무것도 쓰지 않고 흐름만 확인
    create-project my-app --template blog --dry-run
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from src.core.config import get_locks_dir, load_config
from src.core.logging import configure_logging
from src.domain.constants import LATEST_REF
from src.templates.provisioner import TemplateProvisioner

from .context import ProjectContext
from .messages import ConsoleMessenger, StdinPrompt
from .providers import TarballFetcher
from .steps import template_step

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="create-project",
        description="템플릿으로 새 프로젝트 생성",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="프로젝트 디렉터리 (기본: 현재 디렉터리)",
    )
    parser.add_argument(
        "--template",
        type=str,
        help="템플릿 (basics, blog, starlight/<starter>, owner/repo 등)",
    )
    parser.add_argument(
        "--ref",
        type=str,
        default=LATEST_REF,
        help="템플릿 버전 (기본: latest)",
    )
    parser.add_argument(
        "--package-manager",
        type=str,
        help="README 명령에 사용할 패키지 매니저 (기본: 설정값, npm)",
    )
    parser.add_argument(
        "--project-name",
        type=str,
        help="package.json name (기본: 디렉터리 이름)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="파일/네트워크 작업 없이 흐름만 확인",
    )
    parser.add_argument(
        "-y",
        "--yes",
        action="store_true",
        help="프롬프트 없이 기본값 사용",
    )
    parser.add_argument(
        "--config",
        type=str,
        help="설정 파일 경로 (기본: default.yaml)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="디버그 로그 출력",
    )
    return parser


def build_context(args: argparse.Namespace, config: dict) -> ProjectContext:
    """argparse 결과 → ProjectContext."""
    project_name = args.project_name or Path(args.directory).resolve().name
    package_manager = args.package_manager or config["package_manager"]["default"]

    return ProjectContext(
        cwd=args.directory,
        template=args.template,
        ref=args.ref,
        package_manager=package_manager,
        project_name=project_name,
        dry_run=args.dry_run,
        yes=args.yes,
        prompt=StdinPrompt(),
        messenger=ConsoleMessenger(),
        config=config,
    )


async def run_tasks(ctx: ProjectContext) -> None:
    """등록된 Task를 순서대로 실행."""
    for task in ctx.tasks:
        ctx.messenger.info(task.pending, task.start)
        await task.run()
        ctx.messenger.info(task.pending, task.end)


async def create_project(ctx: ProjectContext, provisioner: TemplateProvisioner) -> None:
    """단계 실행 → Task 실행."""
    await template_step(ctx, provisioner)
    await run_tasks(ctx)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    configure_logging(verbose=args.verbose)

    config = load_config(Path(args.config) if args.config else None)
    ctx = build_context(args, config)

    provisioner = TemplateProvisioner(
        fetcher=TarballFetcher.from_config(config),
        reporter=ctx.messenger,
        config=config,
        locks_dir=get_locks_dir(config),
    )

    try:
        asyncio.run(create_project(ctx, provisioner))
    except SystemExit as e:
        if e.code is None:
            return 0
        return e.code if isinstance(e.code, int) else 1
    except KeyboardInterrupt:
        ctx.messenger.error("error", "Aborted.")
        return 130

    return 0


def run() -> None:
    """console script 진입점."""
    sys.exit(main())


if __name__ == "__main__":
    run()
