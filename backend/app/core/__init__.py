"""Core Layer: pure match-engine rules, no IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, models/ or db/
    - Rule functions are pure, synchronous and deterministic
    - repository_protocols.py only declares the async store contracts the shell implements

Design Decisions:
    - Functional core separated from imperative shell (services/ orchestrates the store)
"""
