"""Services Layer: validation rule sets, gates and per-resource handlers.

Invariants:
    - Services depend on repository Protocols, never on ORM models or sessions
    - Every handler returns an Outcome (core/outcome.py)

Design Decisions:
    - Handlers split by resource, one class each (ADR: no god objects)
"""
