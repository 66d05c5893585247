"""Address derivation pipeline.

text key -> raw bytes (keys) -> digest (hashing) -> bech32 string (bech32).
"""

import logging
import time
from collections.abc import Iterable

from . import bech32
from .errors import ValaddrError
from .hashing import address_hash, consensus_hex
from .keys import KEY_FORMATS, decode_public_key
from .metrics import DERIVATION_DURATION_SECONDS, DERIVATION_ERRORS_TOTAL, DERIVATIONS_TOTAL
from .models import DerivationResult, PublicKeySpec, ValidatorRecord
from .types import Bech32Address

logger = logging.getLogger(__name__)


def public_key_to_address(prefix: str, pubkey_bytes: bytes) -> Bech32Address:
    """Convert raw public key bytes to a bech32 address with the given prefix."""
    return Bech32Address(bech32.encode(prefix, address_hash(pubkey_bytes)))


def derive_address(prefix: str, key: PublicKeySpec) -> Bech32Address:
    """Derive the address of a single key.

    Raises:
        UnsupportedFormatError: If the key's format tag is unknown
        MalformedKeyError: If the key text does not decode under its format
        EncodeError: If the prefix cannot be used in a bech32 string

    """
    raw = decode_public_key(key.value, key.format)
    return public_key_to_address(prefix, raw)


def derive(prefix: str, key: PublicKeySpec, index: int = 0) -> DerivationResult:
    """Derive the address of a key, capturing failures in the result."""
    key_format = key.format if key.format in KEY_FORMATS else "unsupported"
    DERIVATIONS_TOTAL.labels(key_format=key_format).inc()

    start_time = time.perf_counter()
    try:
        raw = decode_public_key(key.value, key.format)
        digest = address_hash(raw)
        address = bech32.encode(prefix, digest)
    except ValaddrError as e:
        DERIVATION_ERRORS_TOTAL.labels(error_type=type(e).__name__).inc()
        return DerivationResult(
            index=index,
            format=key.format,
            value=key.value,
            error=str(e),
            error_type=type(e).__name__,
        )
    DERIVATION_DURATION_SECONDS.observe(time.perf_counter() - start_time)

    return DerivationResult(
        index=index,
        format=key.format,
        value=key.value,
        address=address,
        digest_hex=consensus_hex(digest),
    )


def derive_all(prefix: str, keys: Iterable[PublicKeySpec]) -> list[DerivationResult]:
    """Derive addresses for a batch of keys.

    Every key is processed on its own: a failure is recorded in its result and
    logged, and the remaining keys are still processed. Results are returned in
    input order.
    """
    results: list[DerivationResult] = []
    for index, key in enumerate(keys):
        result = derive(prefix, key, index)
        if not result.ok:
            logger.error(f"Failed to derive address for key #{index}: {result.error}")
        results.append(result)

    success_count, failure_count = summarize(results)
    logger.info(
        f"Derivation complete: {success_count} succeeded, {failure_count} failed",
    )
    return results


def summarize(results: Iterable[DerivationResult]) -> tuple[int, int]:
    """Return (success_count, failure_count) for a list of results."""
    success_count = 0
    failure_count = 0
    for result in results:
        if result.ok:
            success_count += 1
        else:
            failure_count += 1
    return success_count, failure_count


def find_address_mismatches(
    validators: Iterable[ValidatorRecord],
    results: Iterable[DerivationResult],
) -> list[int]:
    """Compare derived digests with the hex addresses reported in a validator set.

    Validators without a reported address and failed derivations are skipped.

    Returns:
        Indices of the validators whose reported address differs from the derived digest

    """
    mismatches: list[int] = []
    for validator, result in zip(validators, results, strict=True):
        if validator.address is None or result.digest_hex is None:
            continue
        if validator.address.upper() != result.digest_hex:
            logger.warning(
                f"Validator #{result.index} reports address {validator.address}, "
                f"derived {result.digest_hex}",
            )
            mismatches.append(result.index)
    return mismatches
