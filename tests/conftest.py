"""Test fixtures and utilities."""

from pathlib import Path

import pytest

from valaddr.config import Config
from valaddr.models import PublicKeySpec

DATA_DIR = Path(__file__).parent / "data"

# Bytes 0x00..0x1f, base64 encoded, and the address derived from them
ED25519_KEY_B64 = "AAECAwQFBgcICQoLDA0ODxAREhMUFRYXGBkaGxwdHh8="
ED25519_DIGEST_HEX = "EA4BEB47DEF8492389A1E16634795441E1B87245"
ED25519_ADDRESS = "nomic1af97k377lpyj8zdpu9nrg725g8smsuj9xay3v0"

# 0x02 followed by 32 bytes of 0xab (compressed-key shaped)
SECP256K1_KEY_HEX = "02" + "ab" * 32
SECP256K1_KEY_B64 = "Aqurq6urq6urq6urq6urq6urq6urq6urq6urq6urq6ur"
SECP256K1_ADDRESS = "nomic1ce0n0rv27dwx37dfvhxaaly4lnwelqjuqqcw6f"

# 32 bytes of 0xff
FF_KEY_B64 = "//////////////////////////////////////////8="
FF_ADDRESS = "nomic12nzwqc7m9xrjneuj7fedhzffwkf7yug4davgvh"


@pytest.fixture
def rpc_document() -> Path:
    """Validators RPC response with three validators and reported addresses."""
    return DATA_DIR / "validators_rpc.json"


@pytest.fixture
def partial_document() -> Path:
    """Bare validator set whose second key is not valid base64."""
    return DATA_DIR / "validators_partial.json"


@pytest.fixture
def ed25519_key() -> PublicKeySpec:
    """Return an Ed25519 key with a known address."""
    return PublicKeySpec(format="Ed25519", value=ED25519_KEY_B64)


@pytest.fixture
def single_config() -> Config:
    """Create a single-key configuration."""
    return Config(mode="single", pubkey=ED25519_KEY_B64, log_level="DEBUG")

