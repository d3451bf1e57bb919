"""whereismyfox - device registry and remote-command dispatch service.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
