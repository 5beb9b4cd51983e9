"""Domino Score Tracker Application Package: 14-round match engine behind a FastAPI shell.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, no star exports
"""
