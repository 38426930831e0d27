"""Form schemas checked locally before any request is sent."""

import re
from typing import Annotated, Optional, Tuple, Type, TypeVar
from urllib.parse import urlparse

from pydantic import AfterValidator, BaseModel, ValidationError, field_validator, model_validator

from use_cases.session_models import DraftFields, DraftPayload, parse_tags

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

FormT = TypeVar("FormT", bound=BaseModel)
FormErrors = dict[str, str]


def _check_email(value: str) -> str:
    value = (value or "").strip()
    if not EMAIL_RE.match(value):
        raise ValueError("Invalid email address")
    return value


def _check_password(value: str) -> str:
    if len(value or "") < 6:
        raise ValueError("Password must be at least 6 characters")
    return value


Email = Annotated[str, AfterValidator(_check_email)]
Password = Annotated[str, AfterValidator(_check_password)]


class LoginForm(BaseModel):
    email: Email
    password: Password


class RegisterForm(BaseModel):
    name: str
    email: Email
    password: Password
    confirm_password: str

    @field_validator("name")
    @classmethod
    def _name(cls, value: str) -> str:
        value = (value or "").strip()
        if len(value) < 2:
            raise ValueError("Name must be at least 2 characters")
        return value

    @model_validator(mode="after")
    def _passwords_match(self) -> "RegisterForm":
        if self.password != self.confirm_password:
            raise ValueError("Passwords don't match")
        return self


class DraftForm(BaseModel):
    title: str
    tags: str = ""
    json_file_url: str

    @field_validator("title")
    @classmethod
    def _title(cls, value: str) -> str:
        if not (value or "").strip():
            raise ValueError("Title is required")
        return value

    @field_validator("json_file_url")
    @classmethod
    def _url(cls, value: str) -> str:
        parsed = urlparse((value or "").strip())
        if not parsed.scheme or not parsed.netloc or " " in parsed.netloc:
            raise ValueError("Please enter a valid URL")
        return value.strip()

    def to_payload(self, session_id: Optional[str] = None) -> DraftPayload:
        return DraftPayload(
            title=self.title,
            tags=tuple(parse_tags(self.tags)),
            json_file_url=self.json_file_url,
            session_id=session_id,
        )


def _strip_prefix(message: str) -> str:
    # pydantic prefixes ValueError messages with "Value error, "
    return message.split(", ", 1)[1] if message.startswith("Value error, ") else message


def validate_form(schema: Type[FormT], data: dict) -> Tuple[Optional[FormT], FormErrors]:
    """Return (model, {}) on success or (None, {field: message}) on failure."""
    try:
        return schema(**data), {}
    except ValidationError as e:
        errors: FormErrors = {}
        for err in e.errors():
            loc = err.get("loc") or ()
            name = str(loc[0]) if loc else "confirm_password"
            msg = _strip_prefix(err.get("msg", "Invalid value"))
            if err.get("type") == "missing":
                msg = "This field is required"
            errors.setdefault(name, msg)
        return None, errors


def validate_draft(fields: DraftFields) -> Tuple[Optional[DraftForm], FormErrors]:
    return validate_form(
        DraftForm,
        {"title": fields.title, "tags": fields.tags, "json_file_url": fields.json_file_url},
    )
