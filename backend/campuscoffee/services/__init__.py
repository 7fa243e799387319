"""Services Layer — business rules orchestrating repositories.

Invariants:
    - Services depend on core protocols, never on SQLAlchemy directly
    - Services raise typed CampusCoffeeError subclasses; routes never translate them
"""
