"""
프로젝트 생성 컨텍스트.

CLI 세션이 소유, 프로비저닝 코어는 읽기만 함
(예외: template 단계가 기본값/프롬프트 결과로 template 설정).
"""

import sys
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any, NoReturn

from src.domain.constants import DEFAULT_PACKAGE_MANAGER, LATEST_REF

from .messages import ConsoleMessenger, Messenger, Prompt, StdinPrompt


@dataclass
class Task:
    """비동기 작업 단위 (상태 라벨 + 실행 함수)."""

    pending: str
    start: str
    end: str
    run: Callable[[], Awaitable[Any]]


@dataclass
class ProjectContext:
    """프로젝트 생성 1회 실행의 상태."""

    cwd: str
    template: str | None = None
    ref: str = LATEST_REF
    package_manager: str = DEFAULT_PACKAGE_MANAGER
    project_name: str | None = None
    dry_run: bool = False
    yes: bool = False
    tasks: list[Task] = field(default_factory=list)
    prompt: Prompt = field(default_factory=StdinPrompt)
    messenger: Messenger = field(default_factory=ConsoleMessenger)
    exit: Callable[[int], NoReturn] = sys.exit
    config: dict[str, Any] = field(default_factory=dict)
