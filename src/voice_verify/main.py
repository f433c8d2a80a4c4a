from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import Any

from fastapi import Depends, FastAPI, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from .config import Settings, get_settings
from .exceptions import BadRequest
from .forms import (
    ConfirmVerificationForm,
    StartVerificationForm,
    confirm_verification_form,
    start_verification_form,
)
from .logging_config import setup_logging
from .twilio_client import get_verification_client
from .verification import VerificationClient, confirm_verification, initiate_verification

logger = logging.getLogger(__name__)

INITIATE_FAILED = "Could not initiate call."
CONFIRM_FAILED = "Verification has failed. Please try again."


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(get_settings().log_level)
    yield


app = FastAPI(title="voice-verify", version="0.1.0", lifespan=lifespan)


# --- Dependencies ---


@lru_cache
def get_templates() -> Jinja2Templates:
    return Jinja2Templates(directory=str(get_settings().templates_dir))


def render(
    templates: Jinja2Templates,
    request: Request,
    name: str,
    context: dict[str, Any] | None = None,
    status_code: int = 200,
) -> HTMLResponse:
    return templates.TemplateResponse(request, name, context or {}, status_code=status_code)


@app.exception_handler(BadRequest)
async def bad_request_handler(request: Request, exc: BadRequest) -> HTMLResponse:
    logger.warning("Bad request to %s: %s", request.url.path, exc)
    # Raised during dependency resolution, so look up the templates the same way
    templates = request.app.dependency_overrides.get(get_templates, get_templates)()
    return render(templates, request, "start.html", {"error": str(exc)}, status_code=400)


# --- Routes ---


@app.get("/", response_class=HTMLResponse)
def start_page(request: Request, templates: Jinja2Templates = Depends(get_templates)) -> HTMLResponse:
    """Phone number form. Renders the same page every time; nothing is stored."""
    return render(templates, request, "start.html")


@app.post("/verify", response_class=HTMLResponse)
def verify(
    request: Request,
    form: StartVerificationForm = Depends(start_verification_form),
    client: VerificationClient = Depends(get_verification_client),
    templates: Jinja2Templates = Depends(get_templates),
    settings: Settings = Depends(get_settings),
) -> HTMLResponse:
    """
    Start a voice-call verification.

    On success the provider's verification id is put into the code form as a
    hidden field; the browser sends it back to /confirm.
    """
    result = initiate_verification(
        client,
        country_code=form.country_code,
        phone_number=form.phone_number,
        message_template=settings.message_template,
    )
    if not result.ok:
        logger.error("%s", result.error)
        return render(templates, request, "start.html", {"error": INITIATE_FAILED})

    return render(templates, request, "verify.html", {"id": result.verification_id})


@app.post("/confirm", response_class=HTMLResponse)
def confirm(
    request: Request,
    form: ConfirmVerificationForm = Depends(confirm_verification_form),
    client: VerificationClient = Depends(get_verification_client),
    templates: Jinja2Templates = Depends(get_templates),
) -> HTMLResponse:
    result = confirm_verification(client, verification_id=form.id, token=form.token)
    if not result.ok:
        logger.error("%s", result.error)
        return render(templates, request, "start.html", {"error": CONFIRM_FAILED})

    return render(templates, request, "confirm.html")
