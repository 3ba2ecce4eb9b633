"""
템플릿 locator 해석: 식별자 + ref → fetch 가능한 소스 문자열.

순수 함수 (I/O 없음, 상태 없음). 모든 식별자에 대해 정확히 하나의
locator를 반환하며 여기서는 거부하지 않음 (검증은 fetch 시점).

우선순위:
1. docs 네임스페이스 (starlight, starlight/<starter>) → docs 전용 examples
2. '/' 포함 → third-party, 식별자 그대로
3. first-party 이름 → latest면 전용 브랜치(빠른 경로), 아니면 ref 지정 경로
"""

from src.domain.constants import (
    DEFAULT_PROVIDER,
    DOCS_DEFAULT_STARTER,
    DOCS_NAMESPACE,
    DOCS_REPO,
    EXAMPLES_REPO,
    EXAMPLES_SUBDIR,
    LATEST_REF,
)


def resolve_template_target(
    template: str,
    ref: str = LATEST_REF,
    *,
    docs_namespace: str = DOCS_NAMESPACE,
    docs_repo: str = DOCS_REPO,
    default_starter: str = DOCS_DEFAULT_STARTER,
    examples_repo: str = EXAMPLES_REPO,
) -> str:
    """
    템플릿 식별자를 locator로 변환.

    Args:
        template: 템플릿 식별자 (basics, starlight/tailwind, user/repo 등)
        ref: 버전 참조 (기본 "latest")
        docs_namespace: docs 템플릿 계열 접두어
        docs_repo: docs examples 저장소
        default_starter: docs starter 기본값
        examples_repo: first-party examples 저장소

    Returns:
        locator 문자열 (예: github:withastro/astro#examples/blog)
    """
    # docs 템플릿 (ref 무시)
    if template.startswith(docs_namespace):
        parts = template.split("/")
        starter = parts[1] if len(parts) > 1 and parts[1] else default_starter
        return f"{DEFAULT_PROVIDER}:{docs_repo}/{EXAMPLES_SUBDIR}/{starter}"

    # third-party 템플릿
    if "/" in template:
        return template

    # latest는 examples 전용 브랜치로 → 저장소 전체 tarball 다운로드 회피
    if ref == LATEST_REF:
        return f"{DEFAULT_PROVIDER}:{examples_repo}#{EXAMPLES_SUBDIR}/{template}"

    return f"{DEFAULT_PROVIDER}:{examples_repo}/{EXAMPLES_SUBDIR}/{template}#{ref}"


def resolve_from_config(template: str, ref: str, config: dict) -> str:
    """설정(templates 섹션)을 적용한 resolve_template_target."""
    templates_config = config.get("templates", {})
    return resolve_template_target(
        template,
        ref,
        docs_namespace=templates_config.get("docs_namespace", DOCS_NAMESPACE),
        docs_repo=templates_config.get("docs_repo", DOCS_REPO),
        default_starter=templates_config.get("default_starter", DOCS_DEFAULT_STARTER),
        examples_repo=templates_config.get("examples_repo", EXAMPLES_REPO),
    )
