"""Services Layer - imperative shell around the core: persistence and access control.

Invariants:
    - RegistryStore is the only module that touches ORM models
    - DeviceAPI never bypasses the ownership check

Design Decisions:
    - Collaborators injected through constructors (ADR: no process-wide singletons)
"""
