"""ABI Values: decode JSON call arguments and encode results per ABI type.

Invariants:
    - uint256 accepts ints or plain decimal / 0x-hex digit strings, bounded to [0, 2**256)
    - bytes accepts 0x-prefixed hex strings only ("0x" is empty bytes)
    - string accepts str only, and only when it encodes as UTF-8
    - Encoded results are JSON-safe: bytes -> "0x..", tuples -> lists
"""

import re
from typing import Any, Callable

from secure_notes.core.domain_types import as_uint256
from secure_notes.core.errors import InvalidArgumentError

_HEX_PATTERN = re.compile(r"^0x([0-9a-fA-F]{2})*$")
_DECIMAL_PATTERN = re.compile(r"^[0-9]+$")
_HEX_NUMBER_PATTERN = re.compile(r"^0[xX][0-9a-fA-F]+$")
_FUNCTION_PATTERN = re.compile(r"^([A-Za-z_][A-Za-z0-9_]*)\(([^()]*)\)$")


def decode_uint256(value: Any, name: str) -> int:
    if isinstance(value, str):
        text = value.strip()
        if _DECIMAL_PATTERN.match(text):
            value = int(text, 10)
        elif _HEX_NUMBER_PATTERN.match(text):
            value = int(text[2:], 16)
        else:
            raise InvalidArgumentError(f"{name} is not a uint256: {text[:80]!r}", name)
    return as_uint256(value, name)


def decode_bytes(value: Any, name: str) -> bytes:
    if not isinstance(value, str) or not _HEX_PATTERN.match(value):
        raise InvalidArgumentError(f"{name} must be a 0x-prefixed hex string", name)
    return bytes.fromhex(value[2:])


def decode_string(value: Any, name: str) -> str:
    if not isinstance(value, str):
        raise InvalidArgumentError(f"{name} must be a string", name)
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        raise InvalidArgumentError(f"{name} is not encodable as UTF-8", name)
    return value


DECODERS: dict[str, Callable[[Any, str], Any]] = {
    "uint256": decode_uint256,
    "bytes": decode_bytes,
    "string": decode_string,
}


def parse_signature(signature: str) -> tuple[str, list[str]]:
    """Split "name(type,type)" into ("name", ["type", "type"])."""
    match = _FUNCTION_PATTERN.match(signature)
    if not match:
        raise ValueError(f"malformed function signature: {signature!r}")
    name, params = match.groups()
    return name, [p.strip() for p in params.split(",") if p.strip()]


def decode_args(signature: str, args: list[Any]) -> list[Any]:
    """Decode positional JSON args against the signature's parameter types."""
    _, types = parse_signature(signature)
    if len(args) != len(types):
        raise InvalidArgumentError(
            f"{signature} takes {len(types)} argument(s), got {len(args)}", "args",
        )
    return [
        DECODERS[abi_type](value, f"arg{index}")
        for index, (abi_type, value) in enumerate(zip(types, args))
    ]


def encode_result(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()
    if isinstance(value, (tuple, list)):
        return [encode_result(v) for v in value]
    return value
