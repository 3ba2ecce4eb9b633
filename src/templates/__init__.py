"""
Templates layer: 템플릿 해석, 정규화, 프로비저닝.

역할:
- 식별자 → locator 해석 (locator.py)
- README 정규화 (readme.py)
- 다운로드 후 파일 규칙 (rules.py)
- 다운로드 + 후처리 + 실패 복구 (provisioner.py)

주의: 실제 다운로드/압축 해제는 src/app/providers/ (이 모듈은 인터페이스만 의존)
"""

from .locator import resolve_from_config, resolve_template_target
from .provisioner import ProvisionResult, TemplateProvisioner
from .readme import (
    process_template_readme,
    remove_template_marker_sections,
    rewrite_package_manager_references,
)
from .rules import (
    REMOVAL_RULES,
    UPDATE_RULES,
    FileTransformRule,
    RuleKind,
    detect_indent,
    update_manifest,
)

__all__ = [
    # locator
    "resolve_template_target",
    "resolve_from_config",
    # readme
    "remove_template_marker_sections",
    "rewrite_package_manager_references",
    "process_template_readme",
    # rules
    "FileTransformRule",
    "RuleKind",
    "REMOVAL_RULES",
    "UPDATE_RULES",
    "detect_indent",
    "update_manifest",
    # provisioner
    "TemplateProvisioner",
    "ProvisionResult",
]
