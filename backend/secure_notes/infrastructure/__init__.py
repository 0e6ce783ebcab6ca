"""Infrastructure Layer — database engine, host store adapters, logging.

Invariants:
    - Infrastructure implements core protocols; it never decides note semantics
    - Driver errors are mapped to StorageError before reaching the API

Design Decisions:
    - One SQL table per concern: storage slots and emitted event logs
"""
