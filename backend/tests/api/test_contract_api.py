"""Contract API tests: the HTTP invocation endpoint over a real (SQLite) store.

Tests cover:
    - End-to-end note lifecycle persists across calls
    - Response logs mirror the events of that call only
    - Missing/malformed caller header, unknown functions and bad args return 400
    - Error envelopes name the caller and function of the failed call
    - A failing invocation rolls back every write it made
"""

import pytest

from secure_notes.core.domain_types import EventKind
from secure_notes.core.errors import StorageError
from secure_notes.core.event_encoding import EVENT_SIGNATURES
from secure_notes.services.event_emitter import EventEmitter

ALICE = "0xa1a1a1a1a1a1a1a1a1a1a1a1a1a1a1a1a1a1a1a1"
BOB = "0xb2b2b2b2b2b2b2b2b2b2b2b2b2b2b2b2b2b2b2b2"


async def test_note_lifecycle(call):
    created = await call(ALICE, "createNote(string,string)", "T", "C")
    assert created["result"] == 0
    assert [log["event"] for log in created["logs"]] == ["UserRegistered", "NoteCreated"]

    note = await call(ALICE, "getNote(uint256)", 0)
    title, content, ts = note["result"]
    assert (title, content) == ("T", "C")
    assert ts > 0
    assert note["logs"] == []

    updated = await call(ALICE, "updateNote(uint256,string,string)", 0, "T2", "C2")
    assert [log["event"] for log in updated["logs"]] == ["NoteUpdated"]
    assert (await call(ALICE, "getNote(uint256)", 0))["result"][:2] == ["T2", "C2"]

    await call(ALICE, "deleteNote(uint256)", 0)
    assert (await call(ALICE, "getNoteCount()"))["result"] == 0


async def test_note_created_log_shape(call):
    res = await call(ALICE, "createNote(string,string)", "Hi", "body")
    log = res["logs"][-1]
    assert log["topics"][0] == "0x" + EVENT_SIGNATURES[EventKind.NOTE_CREATED].hex()
    assert log["topics"][1] == "0x" + "00" * 12 + ALICE[2:]
    assert log["topics"][2] == "0x" + "00" * 31 + "00"
    assert log["data"] == "0x" + b"Hi".hex()


async def test_notes_list_and_isolation(call):
    await call(ALICE, "createNote(string,string)", "a", "x")
    await call(ALICE, "createNote(string,string)", "b", "y")
    await call(BOB, "createNote(string,string)", "bob", "z")

    ids, titles, _ = (await call(ALICE, "getNotesList()"))["result"]
    assert (ids, titles) == ([0, 1], ["a", "b"])
    ids, titles, _ = (await call(BOB, "getNotesList()"))["result"]
    assert (ids, titles) == ([0], ["bob"])


async def test_swap_delete_persists(call):
    for title in ("N0", "N1", "N2"):
        await call(ALICE, "createNote(string,string)", title, title.lower())
    await call(ALICE, "deleteNote(uint256)", 0)
    _, titles, _ = (await call(ALICE, "getNotesList()"))["result"]
    assert titles == ["N2", "N1"]
    assert (await call(ALICE, "getNote(uint256)", 0))["result"][1] == "n2"


async def test_decrypt_error_is_a_value(call):
    encrypted = (await call(ALICE, "encryptNote(string)", "secret"))["result"]
    res = await call(BOB, "decryptNote(bytes)", encrypted)
    assert res["result"] == "Error: You don't have permission to decrypt this note"


async def test_register_with_key_then_round_trip(call):
    res = await call(ALICE, "registerUser(bytes)", "0x6b6579")
    assert [log["event"] for log in res["logs"]] == ["UserRegistered"]
    await call(ALICE, "createNote(string,string)", "t", "keyed")
    assert (await call(ALICE, "getNote(uint256)", 0))["result"][1] == "keyed"


async def test_contract_address(call):
    res = await call(ALICE, "getEncryptionContractAddress()")
    assert res["result"] == "0xdf6a95ff02f2fb4f8aeeabcf0dfceddda5976465"


async def test_missing_caller_header_is_rejected(client):
    res = await client.post(
        "/api/v1/contract/call", json={"function": "getNoteCount()", "args": []},
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_ADDRESS"


async def test_unknown_function_is_rejected(call):
    res = await call(ALICE, "selfDestruct()", expect=400)
    assert res["error"]["code"] == "UNKNOWN_FUNCTION"


async def test_bad_argument_is_rejected(call):
    res = await call(ALICE, "getNote(uint256)", "-1", expect=400)
    assert res["error"]["code"] == "INVALID_ARGUMENT"


async def test_error_envelope_names_caller_and_function(call):
    res = await call(ALICE, "getNote(uint256)", "1_000", expect=400)
    assert res["error"]["code"] == "INVALID_ARGUMENT"
    assert res["error"]["context"] == {"caller": ALICE, "function": "getNote(uint256)"}


async def test_string_that_is_not_utf8_is_rejected(client, call):
    body = b'{"function": "createNote(string,string)", "args": ["\\ud800", "c"]}'
    res = await client.post(
        "/api/v1/contract/call", content=body,
        headers={"X-Caller-Address": ALICE, "Content-Type": "application/json"},
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_ARGUMENT"
    assert (await call(ALICE, "getNoteCount()"))["result"] == 0


async def test_malformed_body_is_validation_error(client):
    res = await client.post(
        "/api/v1/contract/call", json={"function": "no parens"},
        headers={"X-Caller-Address": ALICE},
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_failed_invocation_rolls_back(call, monkeypatch):
    async def boom(self, caller, note_id, title):
        raise StorageError("log transport down", "emit")

    monkeypatch.setattr(EventEmitter, "note_created", boom)
    res = await call(ALICE, "createNote(string,string)", "t", "c", expect=503)
    assert res["error"]["code"] == "STORAGE_ERROR"
    assert res["error"]["context"]["function"] == "createNote(string,string)"
    monkeypatch.undo()

    assert (await call(ALICE, "getNoteCount()"))["result"] == 0
    created = await call(ALICE, "createNote(string,string)", "t", "c")
    assert [log["event"] for log in created["logs"]] == ["UserRegistered", "NoteCreated"]


async def test_list_functions(client):
    res = await client.get("/api/v1/contract/functions")
    assert res.status_code == 200
    assert "createNote(string,string)" in res.json()["functions"]


@pytest.mark.parametrize("caller", ["0x123", "a1" * 20, ""])
async def test_malformed_caller_header(client, caller):
    res = await client.post(
        "/api/v1/contract/call", json={"function": "getNoteCount()"},
        headers={"X-Caller-Address": caller},
    )
    assert res.status_code == 400
