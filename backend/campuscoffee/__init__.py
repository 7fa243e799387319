"""CampusCoffee Users API — user management for the campus coffee-ordering app.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""

__version__ = "1.0.0"
