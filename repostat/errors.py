from __future__ import annotations


class RepoStatError(Exception):
    """Base class for errors that carry a caller-facing message."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ClientInputError(RepoStatError):
    status_code = 400


class MissingUrlError(ClientInputError):
    def __init__(self, message: str = "GitHub URL is required") -> None:
        super().__init__(message)


class InvalidUrlError(ClientInputError):
    def __init__(self, message: str = "Invalid GitHub repository URL") -> None:
        super().__init__(message)


class UpstreamError(RepoStatError):
    """The repository metadata lookup failed; nothing else was returned."""

    def __init__(self, status: int, message: str) -> None:
        super().__init__(message)
        self.status = status
        self.status_code = status
