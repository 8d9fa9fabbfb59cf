class StringAnalyzerError(Exception):
    """Base error; carries the HTTP status the API answers with."""
    status_code = 500

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(StringAnalyzerError):
    """Malformed input. 400 when a field is missing, 422 when it has the wrong type."""
    status_code = 400

    def __init__(self, message: str, field: str = None, status_code: int = None):
        super().__init__(message, status_code=status_code)
        self.field = field


class ConflictError(StringAnalyzerError):
    status_code = 409


class NotFoundError(StringAnalyzerError):
    status_code = 404


class UnsatisfiableFilterError(StringAnalyzerError):
    """Parsed filters ask for min_length > max_length."""
    status_code = 422
