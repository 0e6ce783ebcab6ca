"""Service test fixtures: repository wired to in-memory fakes.

Invariants:
    - Every test gets a fresh InMemoryStore and RecordingSink
    - Repository and dispatch share the same store and sink within a test
"""

import pytest

from secure_notes.services.event_emitter import EventEmitter
from secure_notes.services.note_repository import NoteRepository
from secure_notes.services.storage_adapter import NoteStorage
from tests.services.fake_host import InMemoryStore, RecordingSink


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def storage(store):
    return NoteStorage(store)


@pytest.fixture
def repo(storage, sink):
    return NoteRepository(storage, EventEmitter(sink))
