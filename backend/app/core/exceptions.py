"""
exceptions.py — Error Types Raised by Services

Expected negative outcomes (validation failures, unknown ids, wrong
credentials) are plain return values and never appear here. These classes
cover the failures that must propagate to the controller boundary.
"""


class PizzariaError(Exception):
    """Base class for application errors."""


class RevocationError(PizzariaError):
    """The token to revoke is unknown or already revoked."""


class TokenError(PizzariaError):
    """A presented bearer token is malformed, expired, unknown or revoked."""
