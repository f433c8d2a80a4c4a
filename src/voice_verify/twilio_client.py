from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any

from twilio.rest import Client

from .config import get_settings
from .exceptions import MalformedResponse, VerificationRejected
from .verification import Channel, VerificationRequest

# Twilio Verify names the voice channel "call"
TWILIO_CHANNELS = {Channel.VOICE: "call"}

APPROVED = "approved"

logger = logging.getLogger(__name__)


class TwilioVerificationClient:
    """
    VerificationClient backed by a Twilio Verify service.

    The verification SID returned on create is the opaque id that round-trips
    through the browser; confirm checks the code against that SID.
    """

    def __init__(self, service: Any) -> None:
        self._service = service

    @classmethod
    def from_credentials(cls, account_sid: str, auth_token: str, service_sid: str) -> TwilioVerificationClient:
        client = Client(account_sid, auth_token)
        return cls(client.verify.v2.services(service_sid))

    def create(self, request: VerificationRequest) -> str:
        verification = self._service.verifications.create(
            to=request.recipient,
            channel=TWILIO_CHANNELS[request.channel],
            # Advisory only: Twilio reads its own localized message unless custom
            # messages are enabled on the account, and never substitutes %token
            custom_message=request.message_template,
        )
        sid = getattr(verification, "sid", None)
        if not sid:
            raise MalformedResponse("Twilio returned a verification without a SID")
        return sid

    def confirm(self, verification_id: str, token: str) -> None:
        check = self._service.verification_checks.create(
            verification_sid=verification_id,
            code=token,
        )
        if check.status != APPROVED:
            raise VerificationRejected(f"Verification {verification_id} is {check.status}")


class UnconfiguredClient:
    """
    Used when the Twilio settings are incomplete.

    Every call raises, so the handlers show their usual error page instead of
    the request failing before they run.
    """

    def __init__(self, reason: str) -> None:
        self.reason = reason

    def create(self, request: VerificationRequest) -> str:
        raise RuntimeError(self.reason)

    def confirm(self, verification_id: str, token: str) -> None:
        raise RuntimeError(self.reason)


@lru_cache
def get_verification_client() -> TwilioVerificationClient | UnconfiguredClient:
    settings = get_settings()

    if not settings.twilio_account_sid or not settings.twilio_auth_token:
        reason = "Twilio credentials are not configured (TWILIO_ACCOUNT_SID / TWILIO_AUTH_TOKEN)"
    elif not settings.twilio_verify_service_sid:
        reason = "TWILIO_VERIFY_SERVICE_SID is not configured"
    else:
        return TwilioVerificationClient.from_credentials(
            settings.twilio_account_sid,
            settings.twilio_auth_token,
            settings.twilio_verify_service_sid,
        )

    logger.warning(reason)
    return UnconfiguredClient(reason)
