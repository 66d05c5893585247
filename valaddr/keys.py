"""Public key decoding.

Keys arrive as text together with a format tag. The tag selects an entry in
``KEY_FORMATS`` which knows how the text is encoded; decoding yields the raw
key bytes that get hashed into an address.
"""

import base64
import binascii
import logging
from collections.abc import Callable
from dataclasses import dataclass

from .errors import ValaddrError
from .types import RawKeyBytes

logger = logging.getLogger(__name__)


class KeyDecodeError(ValaddrError):
    """Error turning a textual public key into bytes."""


class UnsupportedFormatError(KeyDecodeError):
    """The format tag has no entry in the key format table."""

    def __init__(self, key_format: str) -> None:
        super().__init__(f"Unsupported public key format: {key_format!r}")
        self.key_format = key_format


class MalformedKeyError(KeyDecodeError):
    """The key text is not valid under the encoding of its format."""

    def __init__(self, value: str, key_format: str, reason: str) -> None:
        super().__init__(f"Malformed {key_format} public key {value!r}: {reason}")
        self.value = value
        self.key_format = key_format
        self.reason = reason


def decode_base64(value: str) -> bytes:
    """Decode standard, padded base64. Whitespace and URL-safe characters are rejected."""
    return base64.b64decode(value, validate=True)


def decode_hex(value: str) -> bytes:
    """Decode a hex string of even length, upper or lower case."""
    # binascii rejects the whitespace that bytes.fromhex() would skip
    return binascii.a2b_hex(value)


@dataclass(frozen=True, slots=True)
class KeyFormat:
    """Entry of the key format table.

    Attributes:
        name: The format tag as it appears in input documents
        encoding: Human readable name of the text encoding
        decoder: Callable turning the text into bytes, raising ValueError on bad input

    """

    name: str
    encoding: str
    decoder: Callable[[str], bytes]


KEY_FORMATS: dict[str, KeyFormat] = {}


def register_key_format(name: str, decoder: Callable[[str], bytes], encoding: str) -> KeyFormat:
    """Add a format to the key format table.

    Raises:
        ValueError: If a format with this name is already registered

    """
    if name in KEY_FORMATS:
        raise ValueError(f"Key format already registered: {name}")
    key_format = KeyFormat(name=name, encoding=encoding, decoder=decoder)
    KEY_FORMATS[name] = key_format
    return key_format


register_key_format("Ed25519", decode_base64, "base64")
register_key_format("Secp256k1", decode_hex, "hex")
# Type tags used by the Tendermint/CometBFT RPC, which serializes both key types as base64
register_key_format("tendermint/PubKeyEd25519", decode_base64, "base64")
register_key_format("tendermint/PubKeySecp256k1", decode_base64, "base64")


def supported_formats() -> list[str]:
    """Return the registered format tags, sorted."""
    return sorted(KEY_FORMATS)


def decode_public_key(value: str, key_format: str) -> RawKeyBytes:
    """Decode a textual public key according to its format tag.

    Args:
        value: The encoded public key
        key_format: Format tag, e.g. "Ed25519" or "Secp256k1"

    Returns:
        The raw public key bytes

    Raises:
        UnsupportedFormatError: If the format tag is not registered
        MalformedKeyError: If the value is not valid for the format's encoding

    """
    entry = KEY_FORMATS.get(key_format)
    if entry is None:
        raise UnsupportedFormatError(key_format)

    try:
        raw = entry.decoder(value)
    except ValueError as e:
        # binascii.Error subclasses ValueError; non-ASCII text raises ValueError directly
        raise MalformedKeyError(value, key_format, f"invalid {entry.encoding}: {e}") from e

    logger.debug(f"Decoded {key_format} key into {len(raw)} bytes")
    return RawKeyBytes(raw)
