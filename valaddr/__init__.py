"""valaddr - derive bech32 account addresses from validator public keys."""

__version__ = "0.1.0"
