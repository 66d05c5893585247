"""Tests for configuration validation and argument parsing."""

from pathlib import Path

import pytest

from valaddr.config import Config, get_config


class TestConfigValidation:
    """Tests for Config.__post_init__."""

    def test_single_defaults(self) -> None:
        """Test a minimal single-key configuration."""
        config = Config(mode="single", pubkey="AA==")

        assert config.prefix == "nomic"
        assert config.key_format == "Ed25519"
        assert config.output == "text"
        assert config.validators_path is None
        assert config.metrics_path is None

    def test_invalid_mode(self) -> None:
        """Test that an unknown mode is rejected."""
        with pytest.raises(ValueError, match="mode"):
            Config(mode="interactive", pubkey="AA==")

    def test_single_requires_pubkey(self) -> None:
        """Test that single mode needs a key."""
        with pytest.raises(ValueError, match="pubkey is required"):
            Config(mode="single")

    def test_batch_requires_file(self) -> None:
        """Test that batch mode needs a document."""
        with pytest.raises(ValueError, match="validators_file is required"):
            Config(mode="batch")

    def test_batch_file_not_exists(self, tmp_path: Path) -> None:
        """Test a document path that does not exist."""
        with pytest.raises(ValueError, match="does not exist"):
            Config(mode="batch", validators_file=str(tmp_path / "missing.json"))

    def test_batch_file_is_directory(self, tmp_path: Path) -> None:
        """Test a document path that is a directory."""
        with pytest.raises(ValueError, match="must be a file"):
            Config(mode="batch", validators_file=str(tmp_path))

    def test_batch_valid(self, rpc_document: Path) -> None:
        """Test a valid batch configuration."""
        config = Config(mode="batch", validators_file=str(rpc_document))
        assert config.validators_path == rpc_document

    @pytest.mark.parametrize("prefix", ["", "Nomic", "no mic", "nomic\t"])
    def test_invalid_prefix(self, prefix: str) -> None:
        """Test prefixes that cannot be used in a bech32 string."""
        with pytest.raises(ValueError, match="prefix"):
            Config(mode="single", pubkey="AA==", prefix=prefix)

    def test_uppercase_prefix_allowed(self) -> None:
        """Test that an all-uppercase prefix is accepted."""
        assert Config(mode="single", pubkey="AA==", prefix="COSMOS").prefix == "COSMOS"

    def test_invalid_log_level(self) -> None:
        """Test that an unknown log level is rejected."""
        with pytest.raises(ValueError, match="log_level"):
            Config(mode="single", pubkey="AA==", log_level="VERBOSE")

    def test_log_level_normalized(self) -> None:
        """Test that the log level is normalized to upper case."""
        assert Config(mode="single", pubkey="AA==", log_level="debug").normalized_log_level == "DEBUG"

    def test_invalid_output(self) -> None:
        """Test that an unknown output format is rejected."""
        with pytest.raises(ValueError, match="output"):
            Config(mode="single", pubkey="AA==", output="csv")

    def test_metrics_file_directory_missing(self, tmp_path: Path) -> None:
        """Test a metrics file in a directory that does not exist."""
        with pytest.raises(ValueError, match="metrics_file"):
            Config(mode="single", pubkey="AA==", metrics_file=str(tmp_path / "no" / "m.prom"))


class TestGetConfig:
    """Tests for command line parsing."""

    def test_single(self) -> None:
        """Test the single subcommand."""
        config = get_config(["single", "02ab", "--format", "Secp256k1", "--prefix", "cosmos"])

        assert config.mode == "single"
        assert config.pubkey == "02ab"
        assert config.key_format == "Secp256k1"
        assert config.prefix == "cosmos"

    def test_batch(self, rpc_document: Path) -> None:
        """Test the batch subcommand."""
        config = get_config(
            ["batch", str(rpc_document), "--check-addresses", "--output", "json"]
        )

        assert config.mode == "batch"
        assert config.validators_path == rpc_document
        assert config.check_addresses is True
        assert config.output == "json"
        assert config.prefix == "nomic"

    def test_validation_error_becomes_value_error(self, tmp_path: Path) -> None:
        """Test that validation failures surface as ValueError."""
        with pytest.raises(ValueError, match="does not exist"):
            get_config(["batch", str(tmp_path / "missing.json")])

    def test_bad_prefix(self) -> None:
        """Test that a mixed-case prefix is rejected at parse time."""
        with pytest.raises(ValueError, match="prefix"):
            get_config(["single", "AA==", "--prefix", "Nomic"])

    def test_unknown_format_rejected(self) -> None:
        """Test that argparse only offers registered formats."""
        with pytest.raises(SystemExit):
            get_config(["single", "AA==", "--format", "Sr25519"])

    def test_mode_required(self) -> None:
        """Test that a subcommand is required."""
        with pytest.raises(SystemExit):
            get_config([])
