"""Domain Types tests: address parsing, uint256 bounds, enums, sentinels."""

import pytest

from secure_notes.core.domain_types import (
    ADDRESS_LENGTH, NOT_FOUND_VIEW, UINT256_MAX, ZERO_ADDRESS,
    EventKind, StorageField, address_to_hex, as_uint256, parse_address,
)
from secure_notes.core.errors import InvalidAddressError, InvalidArgumentError


def test_parse_address_round_trips_lowercase():
    raw = "0xF39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
    addr = parse_address(raw)
    assert len(addr) == ADDRESS_LENGTH
    assert address_to_hex(addr) == raw.lower()


@pytest.mark.parametrize("raw", [
    "", "0x", "f39fd6e51aad88f6f4ce6ab8827279cfffb92266",
    "0xf39fd6e51aad88f6f4ce6ab8827279cfffb9226", "0xg39fd6e51aad88f6f4ce6ab8827279cfffb92266",
])
def test_parse_address_rejects_malformed(raw):
    with pytest.raises(InvalidAddressError):
        parse_address(raw)


def test_zero_address():
    assert ZERO_ADDRESS == bytes(20)


def test_as_uint256_bounds():
    assert as_uint256(UINT256_MAX) == UINT256_MAX
    with pytest.raises(InvalidArgumentError):
        as_uint256(UINT256_MAX + 1)
    with pytest.raises(InvalidArgumentError):
        as_uint256(-1)


def test_event_kind_values_match_log_names():
    assert {k.value for k in EventKind} == {
        "UserRegistered", "NoteCreated", "NoteUpdated", "NoteDeleted",
    }


def test_storage_fields_cover_note_and_account_tables():
    assert len(StorageField) == 7


def test_not_found_view_sentinel():
    assert (NOT_FOUND_VIEW.title, NOT_FOUND_VIEW.content, NOT_FOUND_VIEW.timestamp) == (
        "", "Note does not exist", 0,
    )
