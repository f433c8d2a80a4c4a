from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Self

from fastapi import Request
from pydantic import BaseModel, ValidationError

from .exceptions import InvalidField, MissingField


class FormModel(BaseModel):
    @classmethod
    def from_form(cls, data: Mapping[str, Any]) -> Self:
        """
        Validate submitted form data.

        An absent field raises MissingField, a non-text one InvalidField. An
        empty string is a value and is passed through untouched.
        """
        try:
            return cls.model_validate(dict(data))
        except ValidationError as exc:
            error = exc.errors()[0]
            field = str(error["loc"][0])
            if error["type"] == "missing":
                raise MissingField(field) from exc
            raise InvalidField(field) from exc


class StartVerificationForm(FormModel):
    country_code: str
    phone_number: str


class ConfirmVerificationForm(FormModel):
    id: str
    token: str


async def start_verification_form(request: Request) -> StartVerificationForm:
    return StartVerificationForm.from_form(await request.form())


async def confirm_verification_form(request: Request) -> ConfirmVerificationForm:
    return ConfirmVerificationForm.from_form(await request.form())
