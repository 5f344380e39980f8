"""
Contacts API — Contact Service (Business Logic Orchestrator)
==============================================================

What:  Sequences validation → sanitization → store call for every endpoint.
Why:   Keeps business rules out of the route handlers and testable
       without HTTP.
How:   Each method follows the same order, stopping at the first failing
       step by raising the matching exception:

    ┌──────────┐   ┌───────────┐   ┌──────────┐   ┌──────────┐   ┌────────┐
    │ Id check │──▶│ Existence │──▶│ Payload  │──▶│  Phone   │──▶│ Store  │
    │  (400)   │   │  (404)    │   │  (400)   │   │ unique   │   │ write  │
    └──────────┘   └───────────┘   └──────────┘   │  (409)   │   └────────┘
                                                  └──────────┘
Who:   Called by the routes in app/routes/contacts.py.

Design Decision:
    ContactService holds no state of its own; the store is injected. The
    validator and store report failure as values (ValidationResult, None,
    False); this layer turns them into the typed exceptions listed under
    each method's "Raises:", and main.py converts those into responses.
"""

import logging
from typing import Any, List

from app.exceptions import ConflictError, ContactsError, NotFoundError, ValidationError
from app.models.contact import Contact
from app.schemas.contact import ContactResponse, ContactStatsResponse, DeleteResponse
from app.services.sanitizer import sanitize_contact_payload
from app.services.validation import (
    MSG_INVALID_ID,
    validate_contact_payload,
    validate_identifier,
    validate_search_keyword,
)
from app.store import ContactStore

logger = logging.getLogger(__name__)

PHONE_EXISTS_MESSAGE = "This phone number already exists"


def to_response(contact: Contact) -> ContactResponse:
    return ContactResponse(
        id=contact.id,
        name=contact.name,
        phone=contact.phone,
        email=contact.email,
        created_at=contact.created_at,
        updated_at=contact.updated_at,
    )


class ContactService:
    """
    Business logic layer for contact operations.

    Responsibilities:
        - list/get/search: read-only, never mutate the store
        - create/update/delete: validated writes with phone uniqueness
        - stats: counts computed fresh from the current collection
    """

    def __init__(self, store: ContactStore):
        self.store = store

    # ── Helpers ───────────────────────────────────────────────────────────

    def _require_valid_id(self, contact_id: Any) -> None:
        if not validate_identifier(contact_id):
            raise ValidationError([MSG_INVALID_ID])

    def _require_contact(self, contact_id: str) -> Contact:
        contact = self.store.get_by_id(contact_id)
        if contact is None:
            raise NotFoundError(resource="Contact", resource_id=contact_id)
        return contact

    # ── Reads ─────────────────────────────────────────────────────────────

    def list_contacts(self) -> List[ContactResponse]:
        return [to_response(c) for c in self.store.list_all()]

    def get_contact(self, contact_id: str) -> ContactResponse:
        """
        Raises:
            ValidationError: id is neither a UUID v4 nor a numeral (→ 400)
            NotFoundError:   no contact with this id (→ 404)
        """
        self._require_valid_id(contact_id)
        return to_response(self._require_contact(contact_id))

    def search_contacts(self, keyword: Any) -> List[ContactResponse]:
        """
        Substring search over name, phone and email.

        A missing or blank keyword is not an error: the full list is
        returned instead.
        """
        if not validate_search_keyword(keyword):
            return self.list_contacts()
        return [to_response(c) for c in self.store.search(keyword)]

    def get_stats(self) -> ContactStatsResponse:
        contacts = self.store.list_all()
        total = len(contacts)
        with_email = sum(1 for c in contacts if c.email)
        return ContactStatsResponse(
            total_count=total,
            with_email_count=with_email,
            without_email_count=total - with_email,
        )

    # ── Writes ────────────────────────────────────────────────────────────

    def create_contact(self, payload: Any) -> ContactResponse:
        """
        Create a contact from a raw JSON body.

        Workflow:
            1. Validate every field (name, phone required)
            2. Sanitize into a ContactPatch
            3. Reject a phone number already in the store
            4. Store and return the new record

        Raises:
            ValidationError: payload violates one or more rules (→ 400)
            ConflictError:   phone already held by another contact (→ 409)
        """
        validation = validate_contact_payload(payload)
        if not validation.valid:
            raise ValidationError(validation.errors)

        data = sanitize_contact_payload(payload)

        with self.store.lock:
            if self.store.exists_by_phone(data.phone):
                raise ConflictError(PHONE_EXISTS_MESSAGE, context={"phone": data.phone})
            contact = self.store.create(data)

        logger.info("Contact created: %s", contact.id)
        return to_response(contact)

    def update_contact(self, contact_id: str, payload: Any) -> ContactResponse:
        """
        Apply a partial update. Fields missing from the body keep their
        stored values.

        The uniqueness check only runs when the phone actually changes, and
        only against other contacts: re-sending a contact's own number is
        never a conflict.

        Raises:
            ValidationError: bad id or bad payload (→ 400)
            NotFoundError:   no contact with this id (→ 404)
            ConflictError:   new phone held by another contact (→ 409)
        """
        self._require_valid_id(contact_id)

        with self.store.lock:
            existing = self._require_contact(contact_id)

            validation = validate_contact_payload(payload, is_partial=True)
            if not validation.valid:
                raise ValidationError(validation.errors)

            patch = sanitize_contact_payload(payload)

            if (
                patch.phone
                and patch.phone != existing.phone
                and self.store.exists_by_phone(patch.phone, exclude_id=contact_id)
            ):
                raise ConflictError(PHONE_EXISTS_MESSAGE, context={"phone": patch.phone})

            updated = self.store.update(contact_id, patch)

        if updated is None:
            raise NotFoundError(resource="Contact", resource_id=contact_id)

        logger.info(
            "Contact updated: %s (fields=%s)",
            contact_id,
            sorted(patch.model_fields_set),
        )
        return to_response(updated)

    def delete_contact(self, contact_id: str) -> DeleteResponse:
        """
        Raises:
            ValidationError: bad id (→ 400)
            NotFoundError:   no contact with this id (→ 404)
            ContactsError:   removal reported failure after the existence
                             check passed (→ 500)
        """
        self._require_valid_id(contact_id)

        with self.store.lock:
            self._require_contact(contact_id)
            deleted = self.store.delete(contact_id)

        if not deleted:
            raise ContactsError(
                message="Failed to delete contact",
                context={"contact_id": contact_id},
            )

        logger.info("Contact deleted: %s", contact_id)
        return DeleteResponse(success=True, message="Contact deleted successfully")
