"""
Error definitions for template provisioning.

규칙:
- 조용한 실패 금지 → fetch/후처리 실패는 항상 예외로 전파
- 정리(cleanup) 실패만 예외: 원래 에러를 가리지 않도록 폐기
- 선택 파일(README, package.json 등) 부재는 에러 아님
"""

from typing import Any


class ProvisionError(Exception):
    """
    프로비저닝 실패 시 발생하는 에러.

    Usage:
        raise ProvisionError("TEMPLATE_NOT_FOUND", "Template x does not exist!", template="x")
    """

    def __init__(self, code: str, message: str, **context: Any) -> None:
        self.code = code
        self.message = message
        self.context = context
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """로그/JSON 직렬화용."""
        return {
            "code": self.code,
            "message": self.message,
            **self.context,
        }


class TemplateNotFoundError(ProvisionError):
    """원격에 템플릿이 없음 (404). 식별자를 바꾸지 않으면 재시도 무의미."""

    def __init__(self, template: str, **context: Any) -> None:
        super().__init__(
            ErrorCodes.TEMPLATE_NOT_FOUND,
            f"Template {template} does not exist!",
            template=template,
            **context,
        )


class TemplateDownloadError(ProvisionError):
    """그 외 다운로드 실패 (네트워크, 권한, 손상된 아카이브)."""

    def __init__(self, template: str, **context: Any) -> None:
        super().__init__(
            ErrorCodes.TEMPLATE_DOWNLOAD_FAILED,
            f"Unable to download template {template}",
            template=template,
            **context,
        )


class ProvisionLockError(ProvisionError):
    """같은 디렉터리에 대한 다른 프로비저닝이 진행 중."""

    pass


# =============================================================================
# Error Codes
# =============================================================================

class ErrorCodes:
    """에러 코드 상수."""

    # === Provision ===
    TEMPLATE_NOT_FOUND = "TEMPLATE_NOT_FOUND"
    TEMPLATE_DOWNLOAD_FAILED = "TEMPLATE_DOWNLOAD_FAILED"
    PROVISION_LOCK_TIMEOUT = "PROVISION_LOCK_TIMEOUT"

    # === Fetch (provider) ===
    FETCH_FAILED = "FETCH_FAILED"
    FETCH_TARGET_NOT_EMPTY = "FETCH_TARGET_NOT_EMPTY"
    FETCH_UNSAFE_ARCHIVE = "FETCH_UNSAFE_ARCHIVE"
    FETCH_UNSUPPORTED_PROVIDER = "FETCH_UNSUPPORTED_PROVIDER"

    # === Manifest ===
    MANIFEST_INVALID = "MANIFEST_INVALID"
