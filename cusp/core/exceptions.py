"""
Cusp exceptions.

File failures are reported to the caller through these; editing no-ops
(too few points to interpolate, scale factor below the minimum) are not errors.
"""


class CuspError(Exception):
    """Base exception class for all Cusp errors"""


class CurveFileError(CuspError):
    """Raised when a curve file cannot be loaded, saved or exported"""

    def __init__(self, message: str, path=None):
        self.path = path
        self.message = message
        if path is not None:
            message = f"{message} (path: {path})"
        super().__init__(message)


class CurveParseError(CurveFileError):
    """Raised when a curve file is malformed"""

    def __init__(self, message: str, path=None, line_number: int | None = None):
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message, path)


class CurveIOError(CurveFileError):
    """Raised when a curve file cannot be read or written"""
