"""Custom exceptions for the Brutto-Netto-Rechner."""


class BruttoNettoError(Exception):
    """Base exception."""
    pass


class InvalidInputError(BruttoNettoError):
    pass


class UnknownTaxYearError(BruttoNettoError):
    pass


class ConfigError(BruttoNettoError):
    pass
