"""Services Layer: imperative shell around the pure core.

Invariants:
    - Services own transactions and event publishing; rules stay in core/
    - Stores arrive through constructors typed by core/repository_protocols.py

Design Decisions:
    - One service per aggregate: MatchEngine (games, rounds), PlayerService (players)
"""
