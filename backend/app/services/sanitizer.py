"""
Contacts API — Payload Sanitizer
==================================

What:  Normalizes an already-validated contact payload into a ContactPatch.
Why:   The store only ever sees trimmed values and a real None for "no email".
How:   Copies the recognized keys that are present, trimming strings.
       Unknown keys are dropped. Absent keys stay unset on the patch, so a
       partial update leaves the stored values for those fields alone.

    {"name": "  Zhang San ", "email": ""}  →  ContactPatch(name="Zhang San", email=None)
                                               fields set: {"name", "email"}
"""

from typing import Any, Dict, Mapping

from app.schemas.contact import ContactPatch


def sanitize_contact_payload(payload: Mapping[str, Any]) -> ContactPatch:
    """
    Build a ContactPatch from a payload that passed validate_contact_payload.

    Email handling:
        present and non-blank → trimmed value
        present but blank/falsy → None (clears the stored email on update)
        absent → unset
    """
    sanitized: Dict[str, Any] = {}

    if payload.get("name"):
        sanitized["name"] = payload["name"].strip()

    if payload.get("phone"):
        sanitized["phone"] = payload["phone"].strip()

    if "email" in payload:
        email = payload["email"]
        if email and isinstance(email, str):
            sanitized["email"] = email.strip() or None
        else:
            sanitized["email"] = None

    return ContactPatch(**sanitized)
