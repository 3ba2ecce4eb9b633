"""
다운로드 후 파일 변환 규칙.

규칙 = (상대 경로, 종류, 변환 함수):
- DELETE: 존재하면 삭제 (디렉터리는 재귀)
- REWRITE: 존재하면 읽어서 transform(contents, overrides) 결과로 덮어쓰기

고정 규칙 세트 두 개:
- REMOVAL_RULES: 온라인 에디터 전용 파일 (CHANGELOG.md, .codesandbox)
- UPDATE_RULES: package.json (name 설정, private 제거)
"""

import json
import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from src.domain.constants import FILES_TO_REMOVE, MANIFEST_FILENAME
from src.domain.errors import ErrorCodes, ProvisionError

Transform = Callable[[str, dict[str, Any]], str]


class RuleKind(str, Enum):
    """규칙 종류."""

    DELETE = "delete"
    REWRITE = "rewrite"


@dataclass(frozen=True)
class FileTransformRule:
    """경로 → 변환 규칙."""

    path: str
    kind: RuleKind
    transform: Transform | None = None

    def apply(self, contents: str, overrides: dict[str, Any]) -> str:
        if self.kind is not RuleKind.REWRITE or self.transform is None:
            raise ValueError(f"Rule for '{self.path}' is not a rewrite rule")
        return self.transform(contents, overrides)


# =============================================================================
# Manifest Transform
# =============================================================================

# 파일에서 처음 나오는 들여쓰기
FIRST_INDENT_PATTERN = re.compile(r"^([ \t]+)\S", re.MULTILINE)

DEFAULT_INDENT = "\t"

# 템플릿에서 물려받으면 안 되는 키
MANIFEST_DROPPED_KEYS = ("private",)


def detect_indent(contents: str) -> str:
    """
    첫 번째 들여쓰기 감지.

    작성자의 포맷(2칸, 4칸, 탭)을 유지하기 위함.

    Returns:
        들여쓰기 문자열 (없으면 탭)
    """
    match = FIRST_INDENT_PATTERN.search(contents)
    return match.group(1) if match else DEFAULT_INDENT


def update_manifest(contents: str, overrides: dict[str, Any]) -> str:
    """
    package.json 내용에 overrides 병합.

    - overrides 키 설정 (현재: name)
    - private 플래그 제거
    - 원본 들여쓰기 유지

    Args:
        contents: package.json 원문
        overrides: 덮어쓸 값

    Returns:
        직렬화된 package.json

    Raises:
        ProvisionError: MANIFEST_INVALID (JSON 객체가 아님)
    """
    indent = detect_indent(contents)

    try:
        data = json.loads(contents)
    except json.JSONDecodeError as e:
        raise ProvisionError(
            ErrorCodes.MANIFEST_INVALID,
            f"{MANIFEST_FILENAME} is not valid JSON: {e}",
        ) from e

    if not isinstance(data, dict):
        raise ProvisionError(
            ErrorCodes.MANIFEST_INVALID,
            f"{MANIFEST_FILENAME} must contain a JSON object",
        )

    data.update({k: v for k, v in overrides.items() if v is not None})
    for key in MANIFEST_DROPPED_KEYS:
        data.pop(key, None)

    return json.dumps(data, indent=indent, ensure_ascii=False)


# =============================================================================
# Rule Sets
# =============================================================================

REMOVAL_RULES: tuple[FileTransformRule, ...] = tuple(
    FileTransformRule(path=path, kind=RuleKind.DELETE) for path in FILES_TO_REMOVE
)

UPDATE_RULES: tuple[FileTransformRule, ...] = (
    FileTransformRule(path=MANIFEST_FILENAME, kind=RuleKind.REWRITE, transform=update_manifest),
)
