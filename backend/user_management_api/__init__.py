"""User Management API — FastAPI service for login and user CRUD.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
