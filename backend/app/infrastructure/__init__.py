"""Infrastructure Layer: database sessions, SQL stores, event bus and logging.

Invariants:
    - Stores translate between ORM rows and core records; no game rules live here
    - All SQLAlchemy errors surface as core DatabaseError

Design Decisions:
    - One store class per protocol in core/repository_protocols.py
"""
