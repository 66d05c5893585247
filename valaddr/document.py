"""Validator set document loading."""

import logging
from pathlib import Path

import msgspec

from .errors import ValaddrError
from .models import ValidatorSet, ValidatorSetDocument

logger = logging.getLogger(__name__)


class DocumentError(ValaddrError):
    """Error reading or parsing a validator set document."""


_decoder = msgspec.json.Decoder(ValidatorSetDocument)


def parse_validator_set(data: bytes | str) -> ValidatorSet:
    """Parse a validator set from JSON text.

    Raises:
        DocumentError: If the JSON is malformed or has no validator list

    """
    try:
        document = _decoder.decode(data)
    except msgspec.ValidationError as e:
        raise DocumentError(f"Invalid validator set structure: {e}") from e
    except msgspec.DecodeError as e:
        raise DocumentError(f"Invalid JSON: {e}") from e

    if document.result is not None:
        return ValidatorSet(
            validators=document.result.validators,
            block_height=document.result.block_height,
        )
    if document.validators is not None:
        return ValidatorSet(validators=document.validators)
    raise DocumentError("Document has neither result.validators nor validators")


def load_validator_set(path: Path) -> ValidatorSet:
    """Load a validator set from a JSON file."""
    try:
        data = path.read_bytes()
    except FileNotFoundError as e:
        raise DocumentError(f"Validator set file not found: {path}") from e
    except OSError as e:
        raise DocumentError(f"Failed to read validator set file {path}: {e}") from e

    validator_set = parse_validator_set(data)
    logger.info(f"Loaded {len(validator_set)} validator(s) from {path}")
    return validator_set
