"""
Contacts API — Application Package Initializer
================================================

Architecture Note:
    This backend follows a layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │  Services (Validation, Sanitizer,   │  ← Business rules
    │           ContactService)           │
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← Contact record + Pydantic
    ├─────────────────────────────────────┤
    │        Store (In-Memory)            │  ← Ordered contact collection
    └─────────────────────────────────────┘

    Routes delegate to services; services can be tested without HTTP, and
    the store can be swapped for an isolated instance per test.
"""

__version__ = "1.0.0"
