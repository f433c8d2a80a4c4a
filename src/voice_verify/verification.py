from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from .phone import normalize_number

logger = logging.getLogger(__name__)


class Channel(str, Enum):
    VOICE = "voice"


@dataclass(frozen=True)
class VerificationRequest:
    recipient: str
    message_template: str
    channel: Channel = Channel.VOICE


class VerificationClient(Protocol):
    """
    The verification provider as seen by the handlers.

    Implementations raise on any failure: network trouble, a provider-side
    rejection, or a response they cannot make sense of.
    """

    def create(self, request: VerificationRequest) -> str:
        """Start a verification and return the provider's opaque id."""
        ...

    def confirm(self, verification_id: str, token: str) -> None:
        """Return only if the provider approved `token` for `verification_id`."""
        ...


@dataclass(frozen=True)
class ProviderError:
    error_class: str
    message: str

    @classmethod
    def from_exception(cls, exc: Exception) -> ProviderError:
        return cls(error_class=type(exc).__name__, message=str(exc))

    def __str__(self) -> str:
        return f"{self.error_class}: {self.message}"


@dataclass(frozen=True)
class VerificationResult:
    ok: bool
    verification_id: str | None = None
    error: ProviderError | None = None

    @classmethod
    def success(cls, verification_id: str | None = None) -> VerificationResult:
        return cls(ok=True, verification_id=verification_id)

    @classmethod
    def failure(cls, exc: Exception) -> VerificationResult:
        return cls(ok=False, error=ProviderError.from_exception(exc))


def build_request(country_code: str, phone_number: str, message_template: str) -> VerificationRequest:
    return VerificationRequest(
        recipient=normalize_number(country_code, phone_number),
        message_template=message_template,
    )


def initiate_verification(
    client: VerificationClient,
    country_code: str,
    phone_number: str,
    message_template: str,
) -> VerificationResult:
    """
    Place the verification call.

    Any exception from the provider becomes a failed result; nothing is
    retried.
    """
    request = build_request(country_code, phone_number, message_template)
    try:
        verification_id = client.create(request)
    except Exception as exc:  # noqa: BLE001 - every provider failure is the same kind here
        return VerificationResult.failure(exc)

    logger.info("Verification %s started", verification_id)
    return VerificationResult.success(verification_id)


def confirm_verification(client: VerificationClient, verification_id: str, token: str) -> VerificationResult:
    # Wrong code and unknown/expired id are not told apart
    try:
        client.confirm(verification_id, token)
    except Exception as exc:  # noqa: BLE001
        return VerificationResult.failure(exc)

    logger.info("Verification %s confirmed", verification_id)
    return VerificationResult.success(verification_id)
