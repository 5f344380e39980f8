"""
Contacts API — Contact Service Unit Tests
===========================================

What:  Tests for ContactService orchestration (no HTTP).
How:   Runs against an isolated empty store per test; the store is patched
       only to force the delete-failure branch.

What we test:
    ✅ Step order: id check → existence → payload → uniqueness → write
    ✅ Conflict rules for create and update
    ✅ Lenient search fallback
    ✅ Stats computed from current contents
    ✅ Delete failure after existence check maps to an internal error
"""

from unittest.mock import patch

import pytest

from app.exceptions import ConflictError, ContactsError, NotFoundError, ValidationError
from app.services.validation import (
    MSG_INVALID_ID,
    MSG_NAME_REQUIRED,
    MSG_PHONE_INVALID,
    MSG_PHONE_REQUIRED,
)

MISSING_UUID = "3f2b8c1e-9d4a-4b7e-8f6a-1c2d3e4f5a6b"


class TestCreate:

    def test_create_success(self, service, sample_payload):
        contact = service.create_contact(sample_payload)
        assert contact.name == "张三"
        assert contact.phone == "13800138001"
        assert contact.email is None
        assert contact.created_at == contact.updated_at

    def test_create_trims_input(self, service):
        contact = service.create_contact(
            {"name": "  张三  ", "phone": "13800138001", "email": ""}
        )
        assert contact.name == "张三"
        assert contact.email is None

    def test_create_reports_every_error(self, service):
        with pytest.raises(ValidationError) as exc_info:
            service.create_contact({"phone": "12345"})
        assert exc_info.value.details == [MSG_NAME_REQUIRED, MSG_PHONE_INVALID]

    def test_create_duplicate_phone_conflicts(self, service, sample_payload):
        service.create_contact(sample_payload)
        with pytest.raises(ConflictError):
            service.create_contact({"name": "李四", "phone": "13800138001"})
        assert len(service.list_contacts()) == 1


class TestGet:

    def test_get_round_trip(self, service, sample_payload):
        created = service.create_contact(sample_payload)
        assert service.get_contact(created.id) == created

    def test_get_invalid_id(self, service):
        with pytest.raises(ValidationError) as exc_info:
            service.get_contact("not-an-id")
        assert exc_info.value.details == [MSG_INVALID_ID]

    def test_get_missing(self, service):
        with pytest.raises(NotFoundError):
            service.get_contact(MISSING_UUID)


class TestUpdate:

    def test_partial_update_keeps_other_fields(self, service, sample_payload):
        created = service.create_contact(sample_payload)
        updated = service.update_contact(created.id, {"email": "a@b.com"})
        assert updated.email == "a@b.com"
        assert updated.name == created.name
        assert updated.phone == created.phone
        assert updated.created_at == created.created_at
        assert updated.updated_at > created.updated_at

    def test_update_to_own_phone_is_not_conflict(self, service, sample_payload):
        created = service.create_contact(sample_payload)
        updated = service.update_contact(created.id, {"phone": "13800138001", "name": "新名字"})
        assert updated.name == "新名字"

    def test_update_to_other_contacts_phone_conflicts(self, service, sample_payload):
        service.create_contact(sample_payload)
        other = service.create_contact({"name": "李四", "phone": "13800138002"})
        with pytest.raises(ConflictError):
            service.update_contact(other.id, {"phone": "13800138001"})
        assert service.get_contact(other.id).phone == "13800138002"

    def test_update_invalid_id(self, service):
        with pytest.raises(ValidationError) as exc_info:
            service.update_contact("abc", {"name": "x"})
        assert exc_info.value.details == [MSG_INVALID_ID]

    def test_existence_checked_before_payload(self, service):
        with pytest.raises(NotFoundError):
            service.update_contact(MISSING_UUID, {"phone": "bad"})

    def test_update_invalid_payload(self, service, sample_payload):
        created = service.create_contact(sample_payload)
        with pytest.raises(ValidationError) as exc_info:
            service.update_contact(created.id, {"phone": ""})
        assert exc_info.value.details == [MSG_PHONE_REQUIRED]

    def test_update_clears_email(self, service):
        created = service.create_contact(
            {"name": "张三", "phone": "13800138001", "email": "a@b.com"}
        )
        updated = service.update_contact(created.id, {"email": ""})
        assert updated.email is None


class TestDelete:

    def test_delete_then_get_not_found(self, service, sample_payload):
        created = service.create_contact(sample_payload)
        result = service.delete_contact(created.id)
        assert result.success is True
        with pytest.raises(NotFoundError):
            service.get_contact(created.id)

    def test_delete_missing(self, service):
        with pytest.raises(NotFoundError):
            service.delete_contact(MISSING_UUID)

    def test_delete_invalid_id(self, service):
        with pytest.raises(ValidationError):
            service.delete_contact("x y")

    def test_delete_failure_after_existence_check(self, service, store, sample_payload):
        created = service.create_contact(sample_payload)
        with patch.object(store, "delete", return_value=False):
            with pytest.raises(ContactsError) as exc_info:
                service.delete_contact(created.id)
        assert type(exc_info.value) is ContactsError
        assert exc_info.value.status_code == 500


class TestSearchAndStats:

    def test_blank_keyword_returns_everything(self, service, sample_payload):
        service.create_contact(sample_payload)
        service.create_contact({"name": "李四", "phone": "15900000000"})
        assert len(service.search_contacts(None)) == 2
        assert len(service.search_contacts("   ")) == 2

    def test_keyword_filters(self, service, sample_payload):
        service.create_contact(sample_payload)
        service.create_contact({"name": "李四", "phone": "15900000000"})
        assert [c.name for c in service.search_contacts("159")] == ["李四"]

    def test_stats(self, service, sample_payload):
        service.create_contact(sample_payload)
        service.create_contact({"name": "李四", "phone": "15900000000", "email": "li@example.com"})
        stats = service.get_stats()
        assert stats.total_count == 2
        assert stats.with_email_count == 1
        assert stats.without_email_count == 1

    def test_stats_empty(self, service):
        stats = service.get_stats()
        assert (stats.total_count, stats.with_email_count, stats.without_email_count) == (0, 0, 0)
