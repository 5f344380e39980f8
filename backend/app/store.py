"""
Contacts API — In-Memory Contact Store
========================================

What:  Ordered, process-lifetime collection of Contact records, plus the
       FastAPI dependency that hands it to route handlers.
Why:   The service needs no persistence; a list is enough for a small
       contact book. Nothing survives a restart.
How:   create_app() builds one ContactStore and puts it on app.state;
       get_contact_store() reads it back per request. Tests build their own
       isolated stores instead of sharing a module-level singleton.

Ordering:
    Records are kept in creation order. list_all() and search() return
    them in that order; there is no ranking.

Locking:
    Every operation holds `lock` (re-entrant). ContactService also takes
    it around check-then-act sequences (uniqueness check → insert,
    existence check → delete) so those stay atomic if handlers ever run
    on worker threads.
"""

import logging
import threading
import uuid
from datetime import datetime, timezone
from typing import Callable, List, Optional

from fastapi import Request

from app.models.contact import Contact
from app.schemas.contact import ContactPatch

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

# ── Example Data ──────────────────────────────────────────────────────────
# Numeric ids mark these as example records; new contacts get uuid4 ids.
EXAMPLE_CONTACTS = [
    {"id": "1", "name": "张三", "phone": "13800138001", "email": "zhangsan@example.com"},
    {"id": "2", "name": "李四", "phone": "13800138002", "email": "lisi@example.com"},
    {"id": "3", "name": "王五", "phone": "13800138003", "email": None},
]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ContactStore:
    """
    In-memory contact collection.

    Args:
        seed:  Start with the three EXAMPLE_CONTACTS.
        clock: Source of timestamps (injectable for tests).

    Returned records are copies; mutate through update() only.
    """

    def __init__(self, seed: bool = False, clock: Optional[Clock] = None):
        self._clock: Clock = clock or utc_now
        self._contacts: List[Contact] = []
        self.lock = threading.RLock()
        if seed:
            self._seed()

    def _seed(self) -> None:
        now = self._clock()
        for data in EXAMPLE_CONTACTS:
            self._contacts.append(Contact(created_at=now, updated_at=now, **data))
        logger.debug("Seeded %d example contacts", len(EXAMPLE_CONTACTS))

    def _find_index(self, contact_id: str) -> int:
        for index, contact in enumerate(self._contacts):
            if contact.id == contact_id:
                return index
        return -1

    # ── Reads ─────────────────────────────────────────────────────────────

    def list_all(self) -> List[Contact]:
        with self.lock:
            return [contact.copy() for contact in self._contacts]

    def count(self) -> int:
        with self.lock:
            return len(self._contacts)

    def get_by_id(self, contact_id: str) -> Optional[Contact]:
        """First record whose id equals `contact_id` exactly, or None."""
        with self.lock:
            index = self._find_index(contact_id)
            return self._contacts[index].copy() if index >= 0 else None

    def exists_by_phone(self, phone: str, exclude_id: Optional[str] = None) -> bool:
        """True iff a record other than `exclude_id` holds `phone`."""
        with self.lock:
            return any(
                contact.phone == phone and contact.id != exclude_id
                for contact in self._contacts
            )

    def search(self, keyword: str) -> List[Contact]:
        """
        Case-insensitive substring match on name or email, case-sensitive
        substring match on phone. A record matches if any test passes.
        """
        lowered = keyword.lower()
        with self.lock:
            return [
                contact.copy()
                for contact in self._contacts
                if lowered in contact.name.lower()
                or keyword in contact.phone
                or (contact.email and lowered in contact.email.lower())
            ]

    # ── Writes ────────────────────────────────────────────────────────────

    def create(self, data: ContactPatch) -> Contact:
        """Append a new record with a fresh uuid4 id; created_at == updated_at."""
        now = self._clock()
        contact = Contact(
            id=str(uuid.uuid4()),
            name=data.name,
            phone=data.phone,
            email=data.email or None,
            created_at=now,
            updated_at=now,
        )
        with self.lock:
            self._contacts.append(contact)
        return contact.copy()

    def update(self, contact_id: str, patch: ContactPatch) -> Optional[Contact]:
        """
        Shallow-merge the fields set on `patch` over the stored record and
        refresh updated_at. Returns None when no record has `contact_id`.
        """
        changes = patch.model_dump(exclude_unset=True)
        with self.lock:
            index = self._find_index(contact_id)
            if index < 0:
                return None
            contact = self._contacts[index]
            for field_name, value in changes.items():
                setattr(contact, field_name, value)
            contact.updated_at = self._clock()
            return contact.copy()

    def delete(self, contact_id: str) -> bool:
        with self.lock:
            index = self._find_index(contact_id)
            if index < 0:
                return False
            del self._contacts[index]
            return True


# ── Dependency ────────────────────────────────────────────────────────────
def get_contact_store(request: Request) -> ContactStore:
    """
    FastAPI dependency returning the store attached by create_app().

    Example usage in a route:
        @router.get("/contacts")
        async def list_contacts(store: ContactStore = Depends(get_contact_store)):
            return store.list_all()
    """
    return request.app.state.contact_store
