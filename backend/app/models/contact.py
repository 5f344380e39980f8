"""
Contacts API — Contact Record
===============================

What:  The in-memory record for a single contact held by ContactStore.
Why:   Keeps the stored representation separate from the API schemas:
       attributes are snake_case here, the wire form is camelCase.
Who:   Created and mutated by ContactStore only; converted to
       ContactResponse by ContactService.

Field rules (enforced by the validator before a record is created):
    - id:         uuid4 text, or a decimal numeral for seeded contacts
    - name:       non-blank, at most 50 characters after trimming
    - phone:      mainland China mobile number, unique across the store
    - email:      optional; None when absent or blank
    - created_at: fixed at creation
    - updated_at: refreshed on every mutation
"""

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional


@dataclass
class Contact:
    """A stored contact. `id` and `created_at` never change after creation."""

    id: str
    name: str
    phone: str
    email: Optional[str]
    created_at: datetime
    updated_at: datetime

    def copy(self) -> "Contact":
        return replace(self)
