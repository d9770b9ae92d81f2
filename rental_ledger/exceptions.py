"""Custom exception hierarchy for rental-ledger."""


class RentalLedgerError(Exception):
    """Base exception for all rental-ledger errors."""


class EntityNotFoundError(RentalLedgerError):
    """Raised when a referenced entity does not exist."""


class UnknownPropertyError(EntityNotFoundError):
    """Raised when a property id has never been issued."""


class PermissionDeniedError(RentalLedgerError):
    """Raised when the caller may not perform the operation."""


class NotOwnerError(PermissionDeniedError):
    """Raised when the caller is not the property owner."""


class NotGuestError(PermissionDeniedError):
    """Raised when the caller is not the property's current guest."""


class NotAdminError(PermissionDeniedError):
    """Raised when the caller is not the ledger administrator."""


class NotWhitelistedError(PermissionDeniedError):
    """Raised when the caller is not allowed to book."""


class InvalidEntityStateError(RentalLedgerError):
    """Raised when an entity is in an invalid state for the operation."""


class AlreadyUnlistedError(InvalidEntityStateError):
    """Raised when unlisting a property that is already inactive."""


class PropertyBookedError(InvalidEntityStateError):
    """Raised when unlisting a property that has a guest."""


class PropertyInactiveError(InvalidEntityStateError):
    """Raised when booking an unlisted property."""


class AlreadyBookedError(InvalidEntityStateError):
    """Raised when booking a property that already has a guest."""


class PropertyNotBookedError(InvalidEntityStateError):
    """Raised when cancelling a booking that does not exist."""


class InvalidRequestError(RentalLedgerError):
    """Raised when call arguments are inconsistent."""


class InvalidRangeError(InvalidRequestError):
    """Raised when a booking range is empty, reversed or not whole days."""


class WrongPaymentError(InvalidRequestError):
    """Raised when the paid amount differs from the computed rent."""


class WrongRefundError(InvalidRequestError):
    """Raised in strict-refund mode when the refund differs from the payment."""


class SettlementFailedError(RentalLedgerError):
    """Raised when the settlement bridge could not complete a transfer."""


class ConfigurationError(RentalLedgerError):
    """Raised when configuration is invalid or missing."""
