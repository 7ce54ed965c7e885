class DataUnavailableError(Exception):
    def __init__(self, message: str, source: str | None = None):
        self.message = message
        self.source = source
        super().__init__(message)


class FieldValidationError(Exception):
    """A single request rule that did not pass.

    Collected by BookingRequest.collect_errors(), never raised on its own.
    """

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(message)


class RequestRejectedError(Exception):
    def __init__(self, errors: list[FieldValidationError]):
        self.errors = errors
        super().__init__(f"Request rejected with {len(errors)} error(s)")

    @property
    def messages(self) -> list[str]:
        return [e.message for e in self.errors]
