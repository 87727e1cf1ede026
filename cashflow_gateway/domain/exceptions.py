"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class DataStoreError(DomainException):
    """Invoice/account data store returned an error or is unavailable"""

    pass


class InvalidHorizonError(DomainException):
    """Forecast horizon must be at least one day"""

    pass
