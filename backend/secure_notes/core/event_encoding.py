"""Event Encoding: signature constants and topic packing for emitted logs.

Invariants:
    - topics[0] is always the 32-byte signature of the event kind
    - Every topic is exactly WORD_SIZE (32) bytes
    - Address topics are right-aligned (12 zero bytes, then the 20 address bytes)
    - uint256 topics are big-endian

Design Decisions:
    - Signatures are pre-computed keccak256 constants, so no hashing dependency
    - EventLog is an immutable value; transport is the EventSink's concern
"""

from dataclasses import dataclass

from secure_notes.core.domain_types import (
    ADDRESS_LENGTH, WORD_SIZE, EventKind, as_uint256,
)


EVENT_SIGNATURES: dict[EventKind, bytes] = {
    # NoteCreated(address indexed owner, uint256 indexed note_id, string title)
    EventKind.NOTE_CREATED: bytes.fromhex(
        "a56376160d28d2b90a0746c49caba732b47670e9d51bc39e431f4a6d861a0f9d"
    ),
    # NoteUpdated(address indexed owner, uint256 indexed note_id)
    EventKind.NOTE_UPDATED: bytes.fromhex(
        "9b8718329ee8d934e3cb45c98518ea81c6ec5ea3b11dd77b3253e59e67c05c8a"
    ),
    # NoteDeleted(address indexed owner, uint256 indexed note_id)
    EventKind.NOTE_DELETED: bytes.fromhex(
        "95a323c3169ce1b212d95454f314a7ef7dd48dc5748be2c66b0a52d102f280c4"
    ),
    # UserRegistered(address indexed user)
    EventKind.USER_REGISTERED: bytes.fromhex(
        "877a155368c1f0de44cfba7a7da905cbaeeb31943d839b7c67103acaa53009f5"
    ),
}

_KIND_BY_SIGNATURE = {sig: kind for kind, sig in EVENT_SIGNATURES.items()}


@dataclass(frozen=True)
class EventLog:
    """One emitted log: opaque data plus indexed topics."""
    kind: EventKind
    data: bytes
    topics: tuple[bytes, ...]


def address_topic(address: bytes) -> bytes:
    if len(address) != ADDRESS_LENGTH:
        raise ValueError(f"address must be {ADDRESS_LENGTH} bytes, got {len(address)}")
    return bytes(WORD_SIZE - ADDRESS_LENGTH) + bytes(address)


def uint_topic(value: int) -> bytes:
    return as_uint256(value, "topic").to_bytes(WORD_SIZE, "big")


def topic_to_address(topic: bytes) -> bytes:
    return topic[WORD_SIZE - ADDRESS_LENGTH:]


def kind_for_signature(signature: bytes) -> EventKind | None:
    return _KIND_BY_SIGNATURE.get(signature)


def build_log(kind: EventKind, data: bytes, topics: list[bytes]) -> EventLog:
    """Prepend the kind's signature to caller-supplied topics."""
    for topic in topics:
        if len(topic) != WORD_SIZE:
            raise ValueError(f"topic must be {WORD_SIZE} bytes, got {len(topic)}")
    return EventLog(
        kind=kind, data=bytes(data),
        topics=(EVENT_SIGNATURES[kind], *topics),
    )
