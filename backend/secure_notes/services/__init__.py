"""Services Layer — note repository, event emitter and contract dispatch.

Invariants:
    - Storage access goes through NoteStorage (typed slot accessors)
    - Function dispatch uses an explicit dict mapping (no auto-discovery)

Design Decisions:
    - Async shell around the pure core: awaits storage, calls core for decisions
"""
