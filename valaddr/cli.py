"""CLI entry point for valaddr."""

import logging
import sys

import msgspec

from .config import Config, get_config
from .derive import derive, derive_all, find_address_mismatches, summarize
from .document import DocumentError, load_validator_set
from .metrics import write_metrics
from .models import DerivationResult, PublicKeySpec

logger = logging.getLogger(__name__)


def setup_logging(log_level: str) -> None:
    """Configure logging."""
    logging.basicConfig(
        level=getattr(logging, log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def render(results: list[DerivationResult], output: str) -> str:
    """Render results for stdout.

    Text output lists one address per line and leaves out failed keys,
    which are reported through logging.
    """
    if output == "json":
        return msgspec.json.encode(results).decode()
    return "\n".join(r.address for r in results if r.address is not None)


def run(config: Config) -> int:
    """Run the configured derivation and return the process exit code."""
    if config.mode == "batch":
        assert config.validators_path is not None
        try:
            validator_set = load_validator_set(config.validators_path)
        except DocumentError as e:
            logger.error(str(e))
            return 1

        results = derive_all(config.prefix, validator_set.keys())
        if config.check_addresses:
            mismatches = find_address_mismatches(validator_set.validators, results)
            if mismatches:
                logger.warning(f"{len(mismatches)} reported address(es) differ from derived ones")
        exit_code = 0
    else:
        assert config.pubkey is not None
        key = PublicKeySpec(format=config.key_format, value=config.pubkey)
        results = [derive(config.prefix, key)]
        _, failure_count = summarize(results)
        if failure_count:
            logger.error(f"Error deriving address: {results[0].error}")
        exit_code = 1 if failure_count else 0

    rendered = render(results, config.output)
    if rendered:
        print(rendered)
    return exit_code


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    try:
        config = get_config(argv)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    setup_logging(config.normalized_log_level)

    try:
        exit_code = run(config)
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        sys.exit(130)
    finally:
        if config.metrics_path is not None:
            write_metrics(config.metrics_path)

    sys.exit(exit_code)
