"""Core Layer — domain types, errors and boundary protocols; no IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/

Design Decisions:
    - Domain model separated from the ORM: core stays testable without a database
"""
