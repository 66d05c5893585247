"""Type definitions for valaddr.

This module contains NewType definitions for the values that flow through
the derivation pipeline: text key -> raw bytes -> digest -> address.
"""

from typing import NewType

RawKeyBytes = NewType("RawKeyBytes", bytes)
"""Decoded public key bytes (length depends on the key format)."""

AddressDigest = NewType("AddressDigest", bytes)
"""RIPEMD-160(SHA-256(key)), always 20 bytes."""

Bech32Address = NewType("Bech32Address", str)
"""Bech32 string: prefix, separator "1", data part and 6-character checksum."""
