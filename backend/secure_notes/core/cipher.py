"""Cipher Engine: identity-bound XOR stream with owner framing.

Invariants:
    - Ciphertext = owner (20 bytes) ++ xor_stream(plaintext, effective key)
    - Effective key = stored key when non-empty, else the caller's own address
    - Only the caller named in the prefix may decrypt
    - Pure functions only: the stored key is passed in, never looked up here

Design Decisions:
    - xor_stream and framing are separate functions so each is testable alone
    - The key is re-derived at decrypt time from the caller's current stored key;
      a key change leaves older notes decrypting to garbage, not failing
    - Not cryptographically strong. The XOR stream only keeps casual readers out.
"""

from secure_notes.core.domain_types import ADDRESS_LENGTH, Address
from secure_notes.core.errors import (
    DecryptionFailedError,
    DecryptPermissionError,
    InvalidCiphertextFormatError,
)


def effective_key(caller: Address, stored_key: bytes) -> bytes:
    """Stored key if set, else the caller's address (the default key)."""
    return bytes(stored_key) if stored_key else bytes(caller)


def xor_stream(data: bytes, key: bytes) -> bytes:
    """XOR byte i of data with key[i mod len(key)]. Self-inverse."""
    if not key:
        raise ValueError("xor_stream key must not be empty")
    key_len = len(key)
    return bytes(b ^ key[i % key_len] for i, b in enumerate(data))


def frame(owner: Address, body: bytes) -> bytes:
    return bytes(owner) + body


def unframe(caller: Address, data: bytes) -> bytes:
    """Strip the owner prefix after checking it names the caller."""
    if len(data) < ADDRESS_LENGTH:
        raise InvalidCiphertextFormatError(len(data))
    if data[:ADDRESS_LENGTH] != bytes(caller):
        raise DecryptPermissionError()
    return data[ADDRESS_LENGTH:]


def encrypt(caller: Address, stored_key: bytes, plaintext: str) -> bytes:
    key = effective_key(caller, stored_key)
    return frame(caller, xor_stream(plaintext.encode("utf-8"), key))


def decrypt(caller: Address, stored_key: bytes, ciphertext: bytes) -> str:
    """Reverse encrypt(). Raises a CipherError subclass on refusal or failure."""
    body = unframe(caller, ciphertext)
    raw = xor_stream(body, effective_key(caller, stored_key))
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        raise DecryptionFailedError() from None
