"""Configuration management using msgspec Struct."""

import argparse
from pathlib import Path

import msgspec

from .keys import supported_formats

DEFAULT_PREFIX = "nomic"
DEFAULT_KEY_FORMAT = "Ed25519"


class Config(msgspec.Struct, frozen=True):
    """Application configuration using msgspec Struct."""

    # "batch" reads a validator set document, "single" converts one key
    mode: str

    # Address settings
    prefix: str = DEFAULT_PREFIX

    # Batch mode input (paths are kept as str for msgspec.convert)
    validators_file: str | None = None
    check_addresses: bool = False

    # Single mode input
    pubkey: str | None = None
    key_format: str = DEFAULT_KEY_FORMAT

    # Output
    output: str = "text"
    metrics_file: str | None = None

    # Logging
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.mode not in {"batch", "single"}:
            raise ValueError(f"mode must be 'batch' or 'single', got {self.mode!r}")

        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if self.log_level.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}, got {self.log_level}")

        if self.output not in {"text", "json"}:
            raise ValueError(f"output must be 'text' or 'json', got {self.output!r}")

        # Prefix must be usable as a bech32 human-readable part
        if not self.prefix:
            raise ValueError("prefix must not be empty")
        if any(ord(c) < 33 or ord(c) > 126 for c in self.prefix):
            raise ValueError(f"prefix must contain only printable ASCII characters: {self.prefix!r}")
        if self.prefix.lower() != self.prefix and self.prefix.upper() != self.prefix:
            raise ValueError(f"prefix must not mix upper and lower case: {self.prefix!r}")

        if self.mode == "batch":
            if self.validators_path is None:
                raise ValueError("validators_file is required in batch mode")
            if not self.validators_path.exists():
                raise ValueError(f"validators_file does not exist: {self.validators_file}")
            if not self.validators_path.is_file():
                raise ValueError(f"validators_file must be a file: {self.validators_file}")

        if self.mode == "single" and self.pubkey is None:
            raise ValueError("pubkey is required in single mode")

        if self.metrics_path is not None and not self.metrics_path.parent.is_dir():
            raise ValueError(
                f"metrics_file directory does not exist: {self.metrics_path.parent}"
            )

    @property
    def validators_path(self) -> Path | None:
        """Return the validator set document path."""
        return Path(self.validators_file) if self.validators_file is not None else None

    @property
    def metrics_path(self) -> Path | None:
        """Return the metrics output path."""
        return Path(self.metrics_file) if self.metrics_file is not None else None

    @property
    def normalized_log_level(self) -> str:
        """Return normalized uppercase log level."""
        return self.log_level.upper()


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog="valaddr",
        description="valaddr - Derive bech32 account addresses from validator public keys",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--prefix",
        default=DEFAULT_PREFIX,
        help="Bech32 human-readable address prefix",
    )
    common.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="INFO",
        help="Logging level",
    )
    common.add_argument(
        "--output",
        choices=["text", "json"],
        default="text",
        help="Print one address per line, or a JSON list of results",
    )
    common.add_argument(
        "--metrics-file",
        default=None,
        help="Write Prometheus metrics to this file on exit",
    )

    subparsers = parser.add_subparsers(dest="mode", required=True)

    batch = subparsers.add_parser(
        "batch",
        parents=[common],
        help="Derive addresses for every validator in a validator set JSON document",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    batch.add_argument(
        "validators_file",
        help="Path to a validators RPC response or a {\"validators\": [...]} document",
    )
    batch.add_argument(
        "--check-addresses",
        action="store_true",
        default=False,
        help="Warn when a validator's reported hex address differs from the derived one",
    )

    single = subparsers.add_parser(
        "single",
        parents=[common],
        help="Derive the address of one public key",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    single.add_argument("pubkey", help="Encoded public key")
    single.add_argument(
        "-f",
        "--format",
        dest="key_format",
        choices=supported_formats(),
        default=DEFAULT_KEY_FORMAT,
        help="Public key format",
    )

    return parser


def get_config(argv: list[str] | None = None) -> Config:
    """Parse command line arguments and return configuration."""
    args = build_parser().parse_args(argv)

    # Build config dict from CLI arguments
    config_dict: dict[str, object] = {
        "mode": args.mode,
        "prefix": args.prefix,
        "log_level": args.log_level,
        "output": args.output,
        "metrics_file": args.metrics_file,
    }
    if args.mode == "batch":
        config_dict["validators_file"] = args.validators_file
        config_dict["check_addresses"] = args.check_addresses
    else:
        config_dict["pubkey"] = args.pubkey
        config_dict["key_format"] = args.key_format

    # Create config from dict using msgspec convert
    try:
        config = msgspec.convert(config_dict, Config)
    except msgspec.ValidationError as e:
        raise ValueError(f"Configuration validation error: {e}")

    return config
