"""Domain layer: constants and errors."""

from .errors import (
    ErrorCodes,
    ProvisionError,
    ProvisionLockError,
    TemplateDownloadError,
    TemplateNotFoundError,
)

__all__ = [
    "ErrorCodes",
    "ProvisionError",
    "ProvisionLockError",
    "TemplateDownloadError",
    "TemplateNotFoundError",
]
