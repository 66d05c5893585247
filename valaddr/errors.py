"""Base exception for valaddr."""


class ValaddrError(Exception):
    """Base class for every error raised while deriving an address."""
