"""Address hashing: RIPEMD-160 over SHA-256."""

import hashlib

from Crypto.Hash import RIPEMD160

from .types import AddressDigest

ADDRESS_DIGEST_SIZE = 20


def address_hash(raw: bytes) -> AddressDigest:
    """Hash public key bytes into a 20-byte address digest.

    Computes RIPEMD160(SHA256(raw)). Any input, including empty bytes, is valid.
    """
    sha256_digest = hashlib.sha256(raw).digest()
    ripemd160 = RIPEMD160.new()
    ripemd160.update(sha256_digest)
    return AddressDigest(ripemd160.digest())


def consensus_hex(digest: bytes) -> str:
    """Render a digest the way Tendermint RPC reports validator addresses (uppercase hex)."""
    return digest.hex().upper()
