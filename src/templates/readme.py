"""
README 정규화: 스캐폴드 전용 섹션 제거 + 패키지 매니저 명령 치환.

마커 형식:
    <!-- ASTRO:REMOVE:START -->
    제거할 내용
    <!-- ASTRO:REMOVE:END -->

순수 함수만 (I/O 없음). 마커 제거는 멱등.
"""

import re

from src.domain.constants import (
    DEFAULT_PACKAGE_MANAGER,
    REMOVE_MARKER_END,
    REMOVE_MARKER_START,
)

# =============================================================================
# Patterns
# =============================================================================

# non-greedy: 각 START는 가장 가까운 다음 END와 짝 (중첩 미지원)
MARKER_SECTION_PATTERN = re.compile(
    rf"<!--\s*{REMOVE_MARKER_START}\s*-->[\s\S]*?<!--\s*{REMOVE_MARKER_END}\s*-->",
    re.IGNORECASE,
)

# 3개 이상 연속 개행 → 빈 줄 하나
EXCESS_NEWLINES_PATTERN = re.compile(r"\n{3,}")

RUN_COMMAND_PATTERN = re.compile(rf"\b{DEFAULT_PACKAGE_MANAGER} run\b")
BINARY_PATTERN = re.compile(rf"\b{DEFAULT_PACKAGE_MANAGER}\b")


# =============================================================================
# Transforms
# =============================================================================


def remove_template_marker_sections(content: str) -> str:
    """
    마커로 감싼 섹션 모두 제거.

    제거 후 남는 3개 이상의 연속 개행은 2개로 축소.

    Args:
        content: README 원문

    Returns:
        마커 섹션이 제거된 텍스트
    """
    result = MARKER_SECTION_PATTERN.sub("", content)
    return EXCESS_NEWLINES_PATTERN.sub("\n\n", result)


def rewrite_package_manager_references(content: str, package_manager: str) -> str:
    """
    기본 매니저(npm) 명령을 대상 매니저로 치환.

    "npm run" → "<pm>" 먼저 (다른 매니저는 run 불필요), 그 다음 단독 "npm".
    단어 경계 매칭이라 "pnpm", "npmrc" 등은 건드리지 않음.

    Args:
        content: 텍스트
        package_manager: 대상 패키지 매니저 이름

    Returns:
        치환된 텍스트 (기본 매니저면 그대로)
    """
    if package_manager == DEFAULT_PACKAGE_MANAGER:
        return content

    content = RUN_COMMAND_PATTERN.sub(package_manager, content)
    return BINARY_PATTERN.sub(package_manager, content)


def process_template_readme(content: str, package_manager: str) -> str:
    """마커 섹션 제거 후 패키지 매니저 참조 치환."""
    processed = remove_template_marker_sections(content)
    return rewrite_package_manager_references(processed, package_manager)
