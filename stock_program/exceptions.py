class StockError(Exception):
    """Base class for every error raised while building or loading stock records."""


class ValidationError(StockError, ValueError):
    """A field violates a domain invariant (negative stock, non-positive price, bad device type)."""


class FormatError(StockError, ValueError):
    """A code, suffix or numeric field could not be parsed."""


class UnknownTypeError(StockError):
    """An input record's type tag does not match any known component."""
