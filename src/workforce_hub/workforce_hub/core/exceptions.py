class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class OutOfRangeError(ValidationError):
    """Raised when a numeric input falls outside its declared range."""


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""


class DuplicateInspectionError(DomainError):
    """Raised when an inspector already scored a department in the same month."""

    def __init__(self, inspector_name: str, department_name: str):
        self.inspector_name = inspector_name
        self.department_name = department_name
        super().__init__(f'"{inspector_name}" has already scored department "{department_name}" this month')


class DuplicateAttendanceError(DomainError):
    """Raised when an employee is already checked in to an activity."""

    def __init__(self, employee_name: str):
        self.employee_name = employee_name
        super().__init__(f"Employee {employee_name} has already checked in")


class DuplicateRecordError(Exception):
    """Raised by repositories when the record store rejects a unique key."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""
