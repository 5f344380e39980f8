"""
Contacts API — Input Validation
=================================

What:  Pure functions checking contact payloads, phone numbers, emails,
       identifiers and search keywords.
Why:   Every rule lives in one place and can be tested without HTTP.
How:   Regular expressions plus type checks. Nothing here raises; callers
       get a bool or a ValidationResult and decide what to do.
Who:   Called by ContactService before any store operation.

Rules:
    phone      ^1[3-9]\\d{9}$  (mainland China mobile, 11 digits)
    email      local@domain.tld, no whitespace, optional
    name       non-blank string, at most 50 characters after trimming
    identifier UUID v4 (any case) or a run of decimal digits (example data)
"""

import re
from dataclasses import dataclass, field
from typing import Any, List, Mapping

PHONE_PATTERN = re.compile(r"^1[3-9]\d{9}$", re.ASCII)
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
UUID4_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
    re.IGNORECASE,
)
NUMERIC_ID_PATTERN = re.compile(r"^\d+$", re.ASCII)

MAX_NAME_LENGTH = 50

# ── Error Messages ────────────────────────────────────────────────────────
MSG_NOT_AN_OBJECT = "Contact data must be a valid object"
MSG_NAME_REQUIRED = "Name is required and must be a string"
MSG_NAME_BLANK = "Name cannot consist only of whitespace"
MSG_NAME_TOO_LONG = f"Name cannot exceed {MAX_NAME_LENGTH} characters"
MSG_PHONE_REQUIRED = "Phone is required and must be a string"
MSG_PHONE_INVALID = "Please enter a valid mobile phone number"
MSG_EMAIL_INVALID = "Please enter a valid email address"
MSG_INVALID_ID = "Invalid contact ID"


@dataclass
class ValidationResult:
    valid: bool
    errors: List[str] = field(default_factory=list)


def _fullmatch(pattern: "re.Pattern[str]", value: Any) -> bool:
    # fullmatch: `$` alone would accept a trailing newline
    return isinstance(value, str) and pattern.fullmatch(value) is not None


def validate_phone(phone: Any) -> bool:
    """True iff `phone` is an 11-digit string starting with 1[3-9]."""
    return _fullmatch(PHONE_PATTERN, phone)


def validate_email(email: Any) -> bool:
    """True when email is absent/empty (it's optional) or well-formed."""
    if not email:
        return True
    return _fullmatch(EMAIL_PATTERN, email)


def validate_identifier(contact_id: Any) -> bool:
    """True iff the id is a UUID v4 string or a string of decimal digits."""
    return _fullmatch(UUID4_PATTERN, contact_id) or _fullmatch(NUMERIC_ID_PATTERN, contact_id)


def validate_search_keyword(keyword: Any) -> bool:
    return isinstance(keyword, str) and len(keyword.strip()) > 0


def validate_contact_payload(payload: Any, is_partial: bool = False) -> ValidationResult:
    """
    Check a contact body against every field rule.

    What:    Collects all violations instead of stopping at the first, so a
             client can fix everything in one round trip.
    How:     name → phone → email, in that order. With `is_partial` (updates)
             name and phone are only checked when their key is present.
             Email is only checked when present and non-empty.

    Args:
        payload:    Decoded JSON body (anything; non-mappings are rejected)
        is_partial: True for updates, False for creation

    Returns:
        ValidationResult(valid, errors)
    """
    if not isinstance(payload, Mapping):
        return ValidationResult(valid=False, errors=[MSG_NOT_AN_OBJECT])

    errors: List[str] = []

    if not is_partial or "name" in payload:
        name = payload.get("name")
        if not name or not isinstance(name, str):
            errors.append(MSG_NAME_REQUIRED)
        elif not name.strip():
            errors.append(MSG_NAME_BLANK)
        elif len(name.strip()) > MAX_NAME_LENGTH:
            errors.append(MSG_NAME_TOO_LONG)

    if not is_partial or "phone" in payload:
        phone = payload.get("phone")
        if not phone or not isinstance(phone, str):
            errors.append(MSG_PHONE_REQUIRED)
        elif not validate_phone(phone):
            errors.append(MSG_PHONE_INVALID)

    email = payload.get("email")
    if email and not validate_email(email):
        errors.append(MSG_EMAIL_INVALID)

    return ValidationResult(valid=not errors, errors=errors)
