"""
Domain Constants: 템플릿 프로비저닝 전역 상수.

템플릿 식별자, 소스 locator, 후처리 대상 파일 등
시스템 전반에서 사용되는 값들.
"""

# =============================================================================
# Template Identifiers (템플릿 식별자)
# =============================================================================
# 식별자 형태:
# - basics, blog, minimal        → first-party (examples 컬렉션)
# - starlight, starlight/<name>  → docs 템플릿 계열 (전용 examples)
# - owner/repo[/subpath]         → third-party (그대로 locator)

DEFAULT_TEMPLATE = "basics"
LATEST_REF = "latest"

DOCS_NAMESPACE = "starlight"
DOCS_DEFAULT_STARTER = "basics"

# =============================================================================
# Source Locators (giget 스타일)
# =============================================================================
# github:withastro/astro#examples/<name>           (latest, 전용 브랜치)
# github:withastro/astro/examples/<name>#<ref>     (버전 지정)
# github:withastro/starlight/examples/<starter>    (docs)

DEFAULT_PROVIDER = "github"
EXAMPLES_REPO = "withastro/astro"
DOCS_REPO = "withastro/starlight"
EXAMPLES_SUBDIR = "examples"

# =============================================================================
# Package Manager
# =============================================================================

DEFAULT_PACKAGE_MANAGER = "npm"

# =============================================================================
# Post-processing Targets (후처리 대상)
# =============================================================================
# 온라인 에디터(astro.new) 전용 파일 → 로컬 생성 시 삭제

README_FILENAME = "README.md"
MANIFEST_FILENAME = "package.json"

FILES_TO_REMOVE = ("CHANGELOG.md", ".codesandbox")

# README 제거 마커
REMOVE_MARKER_START = "ASTRO:REMOVE:START"
REMOVE_MARKER_END = "ASTRO:REMOVE:END"

# =============================================================================
# Template Choices (프롬프트 선택지)
# =============================================================================

TEMPLATE_CHOICES = (
    {"value": "basics", "label": "A basic, helpful starter project", "hint": "(recommended)"},
    {"value": "blog", "label": "Use blog template"},
    {"value": "starlight", "label": "Use docs (Starlight) template"},
    {"value": "minimal", "label": "Use minimal (empty) template"},
)

# =============================================================================
# Lock
# =============================================================================

LOCKS_DIRNAME = "create-project-locks"
