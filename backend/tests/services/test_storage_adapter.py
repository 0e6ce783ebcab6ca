"""Storage Adapter tests: zero values, encodings and compound keys."""

from secure_notes.core.domain_types import ZERO_ADDRESS, StorageField
from secure_notes.services.storage_adapter import note_key
from tests.services.fake_host import account

ALICE = account(0xA1)
BOB = account(0xB2)


async def test_absent_fields_read_as_zero_values(storage):
    assert await storage.get_note_count(ALICE) == 0
    assert await storage.get_encryption_key(ALICE) == b""
    assert await storage.get_owner(ALICE, 0) == ZERO_ADDRESS
    assert await storage.get_content(ALICE, 0) == b""
    assert await storage.get_timestamp(ALICE, 0) == 0
    assert await storage.get_title(ALICE, 0) == ""
    assert await storage.get_note_id(ALICE, 0) == 0


async def test_uint_fields_stored_as_32_byte_words(storage, store):
    await storage.set_note_count(ALICE, 258)
    assert store.slots[(StorageField.NOTE_COUNT, bytes(ALICE))] == bytes(30) + b"\x01\x02"
    assert await storage.get_note_count(ALICE) == 258


async def test_note_key_is_owner_plus_id_word():
    key = note_key(ALICE, 1)
    assert len(key) == 52
    assert key[:20] == bytes(ALICE)
    assert key[20:] == bytes(31) + b"\x01"


async def test_same_id_under_two_owners_is_two_slots(storage):
    await storage.set_title(ALICE, 0, "alice")
    await storage.set_title(BOB, 0, "bob")
    assert await storage.get_title(ALICE, 0) == "alice"
    assert await storage.get_title(BOB, 0) == "bob"


async def test_has_encryption_key_tracks_written_empty_marker(storage):
    assert not await storage.has_encryption_key(ALICE)
    await storage.set_encryption_key(ALICE, b"")
    assert await storage.has_encryption_key(ALICE)
    assert await storage.get_encryption_key(ALICE) == b""


async def test_title_utf8_round_trip(storage):
    await storage.set_title(ALICE, 3, "Notizen für später ✓")
    assert await storage.get_title(ALICE, 3) == "Notizen für später ✓"
