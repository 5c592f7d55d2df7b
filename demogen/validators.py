"""Validation and sanitization for user-supplied demo inputs.

Every validator returns a ``ValidationResult`` instead of raising, so the
interactive prompt can show the error and ask again.
"""

from __future__ import annotations

import re
from typing import Optional

from pydantic import BaseModel, Field

_UNSAFE_FOLDER_CHARS = re.compile(r'[<>:"/\\|?*]')
_WRITE_KEY = re.compile(r"^[a-zA-Z0-9]+$")


class ValidationResult(BaseModel):
    """Outcome of a single input check."""
    valid: bool
    error: Optional[str] = None
    sanitized: Optional[str] = Field(default=None, description="Cleaned value, when applicable")

    @classmethod
    def ok(cls, sanitized: str | None = None) -> "ValidationResult":
        return cls(valid=True, sanitized=sanitized)

    @classmethod
    def fail(cls, error: str) -> "ValidationResult":
        return cls(valid=False, error=error)


def _is_blank(value: str | None) -> bool:
    return not value or not value.strip()


def validate_company_name(company_name: str | None) -> ValidationResult:
    """Check the company name and derive a folder-safe slug.

    Filesystem-unsafe characters are removed, whitespace runs become
    hyphens, and the result is lowercased::

        validate_company_name("Acme Travel Co").sanitized -> "acme-travel-co"
    """
    if _is_blank(company_name):
        return ValidationResult.fail("Company name cannot be empty")

    sanitized = _UNSAFE_FOLDER_CHARS.sub("", company_name.strip())
    sanitized = re.sub(r"\s+", "-", sanitized).lower()

    if not sanitized:
        return ValidationResult.fail("Company name contains only invalid characters")
    return ValidationResult.ok(sanitized)


def validate_industry(industry: str | None) -> ValidationResult:
    if _is_blank(industry):
        return ValidationResult.fail("Industry cannot be empty")
    return ValidationResult.ok()


def validate_write_key(write_key: str | None) -> ValidationResult:
    """Write keys are alphanumeric."""
    if _is_blank(write_key):
        return ValidationResult.fail("Write Key cannot be empty")
    if not _WRITE_KEY.match(write_key.strip()):
        return ValidationResult.fail("Write Key should only contain letters and numbers")
    return ValidationResult.ok()


def validate_api_token(api_token: str | None) -> ValidationResult:
    if _is_blank(api_token):
        return ValidationResult.fail("Profiles API Token cannot be empty")
    return ValidationResult.ok()


def validate_space_id(space_id: str | None) -> ValidationResult:
    """Space IDs start with ``spa_``."""
    if _is_blank(space_id):
        return ValidationResult.fail("Space ID cannot be empty")
    if not space_id.strip().startswith("spa_"):
        return ValidationResult.fail('Space ID should start with "spa_"')
    return ValidationResult.ok()


def sanitize_path(path: str | None) -> str:
    """Remove ``..`` traversal and collapse repeated slashes."""
    if not path:
        return ""
    cleaned = path.replace("..", "")
    cleaned = re.sub(r"/+", "/", cleaned)
    return cleaned.strip()
