"""Infrastructure Layer — database, logging and external service clients.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Every external call maps SDK/transport exceptions onto core/errors.py types

Design Decisions:
    - Thin wrappers over raw SDK clients so routes and services can be tested with fakes
"""
