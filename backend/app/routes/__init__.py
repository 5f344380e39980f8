# Routes package init
"""
Contacts API — API Routes Package
===================================

Route Inventory:
    - contacts.py: GET    /contacts              (list all)
                   GET    /contacts/stats        (counts)
                   GET    /contacts/search       (keyword search)
                   GET    /contacts/{id}         (single contact)
                   POST   /contacts              (create)
                   PUT    /contacts/{id}         (partial update)
                   DELETE /contacts/{id}         (delete)
    - health.py:   GET    /health                (liveness probe)
                   GET    /                      (service descriptor)

Routes stay thin: extract request data, call ContactService, return the
response model. Business rules live in services.
"""
