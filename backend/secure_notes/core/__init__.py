"""Core Layer — pure note-store logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Cipher, event encoding and index compaction are pure and deterministic

Design Decisions:
    - Functional core separated from the imperative shell that owns storage
"""
