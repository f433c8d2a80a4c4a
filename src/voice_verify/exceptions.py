from __future__ import annotations


class VoiceVerifyError(Exception):
    """Base class for errors raised by this package."""


class BadRequest(VoiceVerifyError):
    """A submitted form cannot be used; answered with HTTP 400."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(message)


class MissingField(BadRequest):
    def __init__(self, field: str) -> None:
        super().__init__(field, f"Missing required field: {field}.")


class InvalidField(BadRequest):
    """The field is there but is not plain text (for example a file upload)."""

    def __init__(self, field: str) -> None:
        super().__init__(field, f"Invalid value for field: {field}.")


class VerificationRejected(VoiceVerifyError):
    """The provider answered but did not approve the code."""


class MalformedResponse(VoiceVerifyError):
    """The provider answered with something we cannot use."""
