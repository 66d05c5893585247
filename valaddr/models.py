"""Structured types for valaddr.

This module contains the msgspec Structs shared by the document loader, the
derivation pipeline and the CLI output.
"""

import msgspec


class PublicKeySpec(msgspec.Struct, frozen=True):
    """A public key as text plus the tag naming its format.

    Attributes:
        format: Format tag, e.g. "Ed25519"
        value: The encoded key (base64 or hex, depending on format)

    """

    format: str
    value: str


class PubKey(msgspec.Struct, frozen=True):
    """The ``pub_key`` object of a validator entry."""

    type: str
    value: str


class ValidatorRecord(msgspec.Struct, frozen=True):
    """One entry of a validator set document.

    Fields other than ``pub_key`` and ``address`` (voting power, priority) are ignored.
    """

    pub_key: PubKey
    address: str | None = None

    def key(self) -> PublicKeySpec:
        """Project this record onto the key it carries."""
        return PublicKeySpec(format=self.pub_key.type, value=self.pub_key.value)


class ValidatorSetResult(msgspec.Struct, frozen=True):
    """The ``result`` object of a validators RPC response."""

    validators: list[ValidatorRecord]
    block_height: str | None = None


class DerivationResult(msgspec.Struct, frozen=True, omit_defaults=True):
    """Outcome of deriving one address.

    Exactly one of ``address`` and ``error`` is set.

    Attributes:
        index: Position of the key in the input
        format: Format tag of the key
        value: The encoded key as supplied
        address: The derived bech32 address
        digest_hex: Uppercase hex of the address digest
        error: Description of the failure
        error_type: Exception class name of the failure

    """

    index: int
    format: str
    value: str
    address: str | None = None
    digest_hex: str | None = None
    error: str | None = None
    error_type: str | None = None

    @property
    def ok(self) -> bool:
        """Whether an address was derived."""
        return self.error is None


class ValidatorSetDocument(msgspec.Struct, frozen=True):
    """Raw shape of a validator set document.

    Either the RPC envelope ``{"result": {"validators": [...]}}`` or a bare
    ``{"validators": [...]}``.
    """

    result: ValidatorSetResult | None = None
    validators: list[ValidatorRecord] | None = None


class ValidatorSet(msgspec.Struct, frozen=True):
    """Validators of a loaded document, in document order."""

    validators: list[ValidatorRecord]
    block_height: str | None = None

    def keys(self) -> list[PublicKeySpec]:
        """Return the public key of every validator."""
        return [validator.key() for validator in self.validators]

    def __len__(self) -> int:
        return len(self.validators)
