"""Services — imperative shell between routes and the database.

Invariants:
    - Services raise core.errors exceptions; they never build HTTP responses
"""
