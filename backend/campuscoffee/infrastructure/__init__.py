"""Infrastructure Layer — database access and cross-cutting concerns.

Invariants:
    - Repositories implement core protocols and convert ORM rows to domain objects
    - Database failures mapped to DatabaseError at the session boundary
"""
