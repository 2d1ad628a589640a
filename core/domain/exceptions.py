"""
Domain exceptions.

Domain exceptions represent business rule violations
and domain-specific error conditions. Validity and quota checks
never raise; they return a ValidationResult instead.
"""


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    def __init__(self, message: str, code: str = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class NotFoundError(DomainException):
    """Raised when a referenced entity does not exist."""

    def __init__(self, message: str = "Not found", code: str = "NOT_FOUND"):
        super().__init__(message, code=code)


class LicenseNotFoundError(NotFoundError):
    """Raised when a license is not found."""

    def __init__(self, message: str = "License not found"):
        super().__init__(message, code="LICENSE_NOT_FOUND")


class ApprovalNotFoundError(NotFoundError):
    """Raised when an approval request is not found."""

    def __init__(self, message: str = "Approval request not found"):
        super().__init__(message, code="APPROVAL_NOT_FOUND")


class TemplateNotFoundError(NotFoundError):
    """Raised when a license template is not found."""

    def __init__(self, message: str = "License template not found"):
        super().__init__(message, code="TEMPLATE_NOT_FOUND")


class UserNotFoundError(NotFoundError):
    """Raised when a user is not found."""

    def __init__(self, message: str = "User not found"):
        super().__init__(message, code="USER_NOT_FOUND")


class ForbiddenError(DomainException):
    """Raised when the caller may not perform an operation."""

    def __init__(self, message: str = "Forbidden", code: str = "FORBIDDEN"):
        super().__init__(message, code=code)


class InsufficientPermissionError(ForbiddenError):
    """Raised when an owner permission flag is not granted."""

    def __init__(self, message: str = "Insufficient permissions"):
        super().__init__(message, code="INSUFFICIENT_PERMISSION")


class LicenseAccessDeniedError(ForbiddenError):
    """Raised when a user may not access a license."""

    def __init__(
        self,
        message: str = "Access denied: insufficient permissions to access this license",
    ):
        super().__init__(message, code="LICENSE_ACCESS_DENIED")


class InvalidStateError(DomainException):
    """Raised when an operation is invalid for the current state."""

    def __init__(self, message: str = "Invalid state", code: str = "INVALID_STATE"):
        super().__init__(message, code=code)


class ApprovalNotPendingError(InvalidStateError):
    """Raised when processing an approval that was already decided."""

    def __init__(self, message: str = "Approval request is not pending"):
        super().__init__(message, code="APPROVAL_NOT_PENDING")


class InvalidLicenseStatusError(InvalidStateError):
    """Raised when a license operation is invalid for the current status."""

    def __init__(self, message: str = "Invalid license status"):
        super().__init__(message, code="INVALID_LICENSE_STATUS")


class ExpiredError(DomainException):
    """Raised when a time-bounded request has lapsed."""

    def __init__(self, message: str = "Expired", code: str = "EXPIRED"):
        super().__init__(message, code=code)


class ApprovalExpiredError(ExpiredError):
    """Raised when processing an approval past its expiry."""

    def __init__(self, message: str = "Approval request has expired"):
        super().__init__(message, code="APPROVAL_EXPIRED")


class InvalidLicenseKeyError(DomainException):
    """Raised when a license key is structurally invalid."""

    def __init__(self, message: str = "Invalid license key"):
        super().__init__(message, code="INVALID_LICENSE_KEY")
