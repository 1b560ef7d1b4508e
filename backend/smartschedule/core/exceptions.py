class AppError(Exception):
    """Base class for all application exceptions."""
    def __init__(self, message: str, status_code: int = 500, details: dict = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

class InvalidTimeFormatError(AppError):
    """Raised when a clock value is not a valid HH:MM time or a duration is not usable."""
    def __init__(self, value, reason: str = "Time must be in HH:MM 24-hour format"):
        super().__init__(reason, status_code=400, details={"value": str(value)})

class EmptySubjectSetError(AppError):
    """Raised when the generator has no subjects to cycle through."""
    def __init__(self, kind: str):
        super().__init__(
            f"At least one {kind} subject is required to generate a timetable",
            status_code=400,
            details={"kind": kind},
        )

class ResourceNotFoundError(AppError):
    """Raised when a requested resource is not found."""
    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(
            f"{resource_type} with id {resource_id} not found",
            status_code=404,
            details={"resource": resource_type, "id": resource_id},
        )
