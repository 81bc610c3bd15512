"""Core Layer — errors, security primitives and validation rules.

Invariants:
    - No module in core/ imports from services/, api/, or infrastructure/
    - No DB access; password_rules is pure
"""
