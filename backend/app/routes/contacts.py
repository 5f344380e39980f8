"""
Contacts API — Contact Route Handlers
=======================================

What:  HTTP endpoints for listing, searching, reading, creating, updating
       and deleting contacts, plus aggregate stats.
How:   Extracts path/query/body, delegates to ContactService, returns the
       response model. Errors are raised by the service and formatted by
       the global handlers in main.py.

Route order matters: /stats and /search are declared before /{contact_id}
so they aren't captured as ids.
"""

from typing import Any, List, Optional

from fastapi import APIRouter, Body, Depends, Query

from app.schemas.contact import (
    ContactResponse,
    ContactStatsResponse,
    DeleteResponse,
    ErrorResponse,
)
from app.services.contact_service import ContactService
from app.store import ContactStore, get_contact_store


router = APIRouter(prefix="/contacts", tags=["Contacts"])

CONTACT_BODY_EXAMPLE = {"name": "张三", "phone": "13800138001", "email": "zhangsan@example.com"}


def get_contact_service(store: ContactStore = Depends(get_contact_store)) -> ContactService:
    return ContactService(store)


@router.get(
    "",
    response_model=List[ContactResponse],
    summary="List all contacts",
)
async def list_contacts(
    service: ContactService = Depends(get_contact_service),
) -> List[ContactResponse]:
    return service.list_contacts()


@router.get(
    "/stats",
    response_model=ContactStatsResponse,
    summary="Contact statistics",
    description="Total contacts and how many do or don't have an email address.",
)
async def get_contact_stats(
    service: ContactService = Depends(get_contact_service),
) -> ContactStatsResponse:
    return service.get_stats()


@router.get(
    "/search",
    response_model=List[ContactResponse],
    summary="Search contacts",
    description=(
        "Case-insensitive substring match on name and email, substring match on phone. "
        "A missing or blank keyword returns every contact."
    ),
)
async def search_contacts(
    keyword: Optional[str] = Query(default=None, description="Text to look for"),
    service: ContactService = Depends(get_contact_service),
) -> List[ContactResponse]:
    return service.search_contacts(keyword)


@router.get(
    "/{contact_id}",
    response_model=ContactResponse,
    responses={
        400: {"description": "Invalid contact ID", "model": ErrorResponse},
        404: {"description": "Contact not found", "model": ErrorResponse},
    },
    summary="Get a single contact",
)
async def get_contact(
    contact_id: str,
    service: ContactService = Depends(get_contact_service),
) -> ContactResponse:
    return service.get_contact(contact_id)


@router.post(
    "",
    status_code=201,
    response_model=ContactResponse,
    responses={
        400: {"description": "Validation failed", "model": ErrorResponse},
        409: {"description": "Phone number already exists", "model": ErrorResponse},
    },
    summary="Create a contact",
)
async def create_contact(
    payload: Any = Body(default=None, examples=[CONTACT_BODY_EXAMPLE]),
    service: ContactService = Depends(get_contact_service),
) -> ContactResponse:
    """
    Body is taken as raw JSON so that every rule violation is reported
    together with a 400, rather than FastAPI's per-field 422.
    """
    return service.create_contact(payload)


@router.put(
    "/{contact_id}",
    response_model=ContactResponse,
    responses={
        400: {"description": "Invalid ID or validation failed", "model": ErrorResponse},
        404: {"description": "Contact not found", "model": ErrorResponse},
        409: {"description": "Phone number already exists", "model": ErrorResponse},
    },
    summary="Update a contact",
    description="Partial update: fields left out of the body keep their current values.",
)
async def update_contact(
    contact_id: str,
    payload: Any = Body(default=None, examples=[{"email": "zhangsan@example.com"}]),
    service: ContactService = Depends(get_contact_service),
) -> ContactResponse:
    return service.update_contact(contact_id, payload)


@router.delete(
    "/{contact_id}",
    response_model=DeleteResponse,
    responses={
        400: {"description": "Invalid contact ID", "model": ErrorResponse},
        404: {"description": "Contact not found", "model": ErrorResponse},
    },
    summary="Delete a contact",
)
async def delete_contact(
    contact_id: str,
    service: ContactService = Depends(get_contact_service),
) -> DeleteResponse:
    return service.delete_contact(contact_id)
