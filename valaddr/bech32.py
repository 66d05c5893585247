"""Bech32 encoding and decoding (BIP-0173 checksum).

An address is ``hrp + "1" + data + checksum`` where every data and checksum
character carries 5 bits. Bytes are regrouped from 8-bit to 5-bit values
before encoding and back after decoding.
"""

from collections.abc import Iterable, Sequence

from .errors import ValaddrError

CHARSET = "qpzry9x8gf2tvdw0s3jn54khce6mua7l"
SEPARATOR = "1"
CHECKSUM_LENGTH = 6
MAX_LENGTH = 90

_GENERATOR = (0x3B6A57B2, 0x26508E6D, 0x1EA119FA, 0x3D4233DD, 0x2A1462B3)
_CHARSET_INDEX = {char: value for value, char in enumerate(CHARSET)}


class Bech32Error(ValaddrError):
    """Base error for bech32 operations."""


class EncodeError(Bech32Error):
    """Input cannot be rendered as a bech32 string."""


class DecodeError(Bech32Error):
    """String is not a well-formed bech32 address."""


class ChecksumError(DecodeError):
    """Bech32 string is well-formed but its checksum does not verify."""


class ConversionError(Bech32Error):
    """Bit regrouping failed (value out of range or invalid padding)."""


def polymod(values: Iterable[int]) -> int:
    """Compute the bech32 BCH checksum state over 5-bit values."""
    chk = 1
    for value in values:
        top = chk >> 25
        chk = ((chk & 0x1FFFFFF) << 5) ^ value
        for i, gen in enumerate(_GENERATOR):
            if (top >> i) & 1:
                chk ^= gen
    return chk


def hrp_expand(hrp: str) -> list[int]:
    """Expand the human-readable part into high bits, a zero, then low bits."""
    return [ord(x) >> 5 for x in hrp] + [0] + [ord(x) & 31 for x in hrp]


def create_checksum(hrp: str, data: Sequence[int]) -> list[int]:
    """Compute the six 5-bit checksum values for hrp and data."""
    values = hrp_expand(hrp) + list(data)
    mod = polymod(values + [0] * CHECKSUM_LENGTH) ^ 1
    return [(mod >> 5 * (5 - i)) & 31 for i in range(CHECKSUM_LENGTH)]


def verify_checksum(hrp: str, data: Sequence[int]) -> bool:
    """Check that data (checksum included) is valid for hrp."""
    return polymod(hrp_expand(hrp) + list(data)) == 1


def convert_bits(
    data: Iterable[int],
    from_bits: int,
    to_bits: int,
    pad: bool = True,
) -> list[int]:
    """Regroup a sequence of from_bits-wide values into to_bits-wide values.

    Bits are consumed most significant first. With ``pad`` the last group is
    filled with zero bits on the right; without it, leftover bits must be
    fewer than from_bits and all zero.

    Raises:
        ConversionError: If a value does not fit in from_bits, or padding is invalid

    """
    acc = 0
    bits = 0
    ret: list[int] = []
    maxv = (1 << to_bits) - 1
    max_acc = (1 << (from_bits + to_bits - 1)) - 1
    for value in data:
        if value < 0 or (value >> from_bits):
            raise ConversionError(f"Value {value} does not fit in {from_bits} bits")
        acc = ((acc << from_bits) | value) & max_acc
        bits += from_bits
        while bits >= to_bits:
            bits -= to_bits
            ret.append((acc >> bits) & maxv)
    if pad:
        if bits:
            ret.append((acc << (to_bits - bits)) & maxv)
    elif bits >= from_bits:
        raise ConversionError(f"Too many leftover bits: {bits}")
    elif (acc << (to_bits - bits)) & maxv:
        raise ConversionError("Non-zero padding bits")
    return ret


def _check_characters(text: str, what: str, error: type[Bech32Error]) -> None:
    for char in text:
        if ord(char) < 33 or ord(char) > 126:
            raise error(f"Invalid character {char!r} in {what}")
    if text.lower() != text and text.upper() != text:
        raise error(f"Mixed case {what}: {text!r}")


def bech32_encode(hrp: str, data: Sequence[int]) -> str:
    """Encode a human-readable part and 5-bit values as a bech32 string.

    An all-uppercase hrp is lowercased; the result is always lowercase.

    Raises:
        EncodeError: On an empty or invalid hrp, out-of-range data, or a result
            longer than MAX_LENGTH

    """
    if not hrp:
        raise EncodeError("Human-readable prefix must not be empty")
    _check_characters(hrp, "prefix", EncodeError)
    hrp = hrp.lower()

    for value in data:
        if value < 0 or value > 31:
            raise EncodeError(f"Data value {value} is not a 5-bit value")

    length = len(hrp) + len(SEPARATOR) + len(data) + CHECKSUM_LENGTH
    if length > MAX_LENGTH:
        raise EncodeError(f"Encoded length {length} exceeds maximum of {MAX_LENGTH}")

    combined = list(data) + create_checksum(hrp, data)
    return hrp + SEPARATOR + "".join(CHARSET[d] for d in combined)


def bech32_decode(address: str) -> tuple[str, list[int]]:
    """Split a bech32 string into its hrp and 5-bit data values (checksum removed).

    Raises:
        DecodeError: If the string is malformed
        ChecksumError: If the checksum does not verify

    """
    if len(address) > MAX_LENGTH:
        raise DecodeError(f"Address length {len(address)} exceeds maximum of {MAX_LENGTH}")
    _check_characters(address, "address", DecodeError)
    address = address.lower()

    pos = address.rfind(SEPARATOR)
    if pos == -1:
        raise DecodeError(f"Missing separator {SEPARATOR!r}")
    if pos == 0:
        raise DecodeError("Empty human-readable prefix")
    if pos + 1 + CHECKSUM_LENGTH > len(address):
        raise DecodeError("Data part too short to hold a checksum")

    hrp = address[:pos]
    data: list[int] = []
    for char in address[pos + 1 :]:
        value = _CHARSET_INDEX.get(char)
        if value is None:
            raise DecodeError(f"Invalid data character {char!r}")
        data.append(value)

    if not verify_checksum(hrp, data):
        raise ChecksumError(f"Invalid checksum for {address!r}")

    return hrp, data[:-CHECKSUM_LENGTH]


def encode(prefix: str, payload: bytes) -> str:
    """Encode bytes (typically an address digest) as a bech32 string."""
    try:
        data = convert_bits(payload, 8, 5, pad=True)
    except ConversionError as e:
        raise EncodeError(str(e)) from e
    return bech32_encode(prefix, data)


def decode(address: str) -> tuple[str, bytes]:
    """Decode a bech32 string back into its prefix and payload bytes."""
    hrp, data = bech32_decode(address)
    try:
        payload = bytes(convert_bits(data, 5, 8, pad=False))
    except ConversionError as e:
        raise DecodeError(f"Invalid data part: {e}") from e
    return hrp, payload
