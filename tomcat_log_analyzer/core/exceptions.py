"""Error kinds raised by the analysis services.

Routes never catch these; the handlers registered in ``main.py`` map each
family onto an HTTP status.
"""


class LogAnalyzerError(Exception):
    """Base class for every error raised by the services."""

    detail = "Log analyzer error"

    def __init__(self, detail: str | None = None):
        super().__init__(detail or self.detail)
        if detail:
            self.detail = detail


class InvalidRequestError(LogAnalyzerError):
    """Caller error: bad input, reported as 400 and never logged as a fault."""

    detail = "Invalid request"


class EmptyFileError(InvalidRequestError):
    detail = "File is empty."


class FileTooLargeError(InvalidRequestError):
    """Upload exceeds MAX_UPLOAD_MB, reported as 413."""

    detail = "File too large"


class InvalidQueryError(InvalidRequestError):
    detail = "Invalid search query."


class NoActiveFileError(LogAnalyzerError):
    """No log file has been uploaded yet."""

    detail = "No file has been uploaded yet."


class LogReadError(LogAnalyzerError):
    detail = "Failed to read or parse log file."


class LogWriteError(LogAnalyzerError):
    detail = "Failed to save file."
