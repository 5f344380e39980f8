# Services package init
"""
Contacts API — Services Layer
===============================

Service Inventory:
    - validation:      pure format checks for payloads, ids and keywords
    - sanitizer:       trims/normalizes validated payloads into ContactPatch
    - ContactService:  orchestrates validate → sanitize → store per endpoint
"""
