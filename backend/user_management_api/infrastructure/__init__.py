"""Infrastructure Layer — database sessions and logging setup.

Invariants:
    - Infrastructure never imports from api/ or services/
    - All SQLAlchemy failures mapped to core.errors before leaving this layer
"""
