"""Core Layer - pure domain logic, no IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Functions are pure and deterministic; Protocols only describe the shell

Design Decisions:
    - Functional core separated from imperative shell (ADR: ExMA impureim sandwich)
"""
