"""
프로젝트 생성 단계: template.

역할:
- 템플릿 결정 (명시 / --yes 기본값 / 프롬프트)
- dry-run이면 건너뜀
- 실제 복사는 Task로 등록 (CLI가 순서대로 실행)
"""

import logging

from src.domain.constants import DEFAULT_TEMPLATE, TEMPLATE_CHOICES
from src.templates.provisioner import ProvisionResult, TemplateProvisioner

from .context import ProjectContext, Task

logger = logging.getLogger(__name__)

FALLBACK_ERROR_MESSAGE = "Unable to clone template."


async def template_step(ctx: ProjectContext, provisioner: TemplateProvisioner) -> None:
    """
    template 단계 실행.

    Args:
        ctx: 프로젝트 컨텍스트 (template이 비어있으면 설정됨)
        provisioner: 다운로드 오케스트레이터
    """
    default_template = ctx.config.get("templates", {}).get("default", DEFAULT_TEMPLATE)

    if not ctx.template and ctx.yes:
        ctx.template = default_template

    if ctx.template:
        ctx.messenger.info("tmpl", f"Using {ctx.template} as project template")
    else:
        ctx.template = await ctx.prompt.select(
            name="template",
            message="How would you like to start your new project?",
            choices=[dict(choice) for choice in TEMPLATE_CHOICES],
            initial=default_template,
        )

    if ctx.dry_run:
        ctx.messenger.info("--dry-run", "Skipping template copying")
    elif ctx.template:
        template = ctx.template

        async def copy_template() -> ProvisionResult | None:
            try:
                return await provisioner.provision(template, ctx)
            except Exception as e:
                logger.debug("Template provisioning failed", exc_info=True)
                ctx.messenger.error("error", str(e) or FALLBACK_ERROR_MESSAGE)
                ctx.exit(1)
                return None

        ctx.tasks.append(
            Task(
                pending="Template",
                start="Template copying...",
                end="Template copied",
                run=copy_template,
            )
        )
    else:
        ctx.exit(1)
