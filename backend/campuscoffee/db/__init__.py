"""Database Metadata — declarative base shared by ORM models and migrations.

Invariants:
    - Engine and session lifecycle live in infrastructure/database.py, not here
"""
