from __future__ import annotations

import pytest

from voice_verify.verification import VerificationRequest


class FakeClient:
    """Stand-in for the verification provider that records every call."""

    def __init__(
        self,
        verification_id: str = "abc123",
        create_error: Exception | None = None,
        confirm_error: Exception | None = None,
    ) -> None:
        self.verification_id = verification_id
        self.create_error = create_error
        self.confirm_error = confirm_error
        self.created: list[VerificationRequest] = []
        self.confirmed: list[tuple[str, str]] = []

    def create(self, request: VerificationRequest) -> str:
        self.created.append(request)
        if self.create_error is not None:
            raise self.create_error
        return self.verification_id

    def confirm(self, verification_id: str, token: str) -> None:
        self.confirmed.append((verification_id, token))
        if self.confirm_error is not None:
            raise self.confirm_error


@pytest.fixture
def fake_client() -> FakeClient:
    return FakeClient()
