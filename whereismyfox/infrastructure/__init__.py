"""Infrastructure Layer - database access, identity verifier client, logging.

Invariants:
    - Infrastructure only imports core/ for error types and records
    - All external failures mapped to typed errors from core/errors.py

Design Decisions:
    - Thin wrappers over raw clients (ADR: ExMA single responsibility)
"""
