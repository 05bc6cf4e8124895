"""
User API schemas (request/response models).

Request models are the validation layer for `/usuarios`: every rule on
every field is checked and all failures are reported together.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, EmailStr, StringConstraints, field_validator

MAX_EMAIL_LENGTH = 150

Name = Annotated[str, StringConstraints(strip_whitespace=True, min_length=2, max_length=100)]


GMAIL_DOMAINS = frozenset({"gmail.com", "googlemail.com"})
ICLOUD_DOMAINS = frozenset({"icloud.com", "me.com"})
YAHOO_DOMAINS = frozenset(
    {
        "rocketmail.com", "yahoo.ca", "yahoo.co.uk", "yahoo.com", "yahoo.de",
        "yahoo.fr", "yahoo.in", "yahoo.it", "ymail.com",
    }
)
YANDEX_DOMAINS = frozenset({"yandex.ru", "yandex.ua", "yandex.kz", "yandex.com", "yandex.by", "ya.ru"})
OUTLOOK_DOMAINS = frozenset(
    [f"hotmail.{tld}" for tld in (
        "at", "be", "ca", "cl", "co.il", "co.nz", "co.th", "co.uk", "com", "com.ar",
        "com.au", "com.br", "com.gr", "com.mx", "com.pe", "com.tr", "com.vn", "cz",
        "de", "dk", "es", "fr", "hu", "id", "ie", "in", "it", "jp", "kr", "lv", "my",
        "ph", "pt", "sa", "sg", "sk",
    )]
    + [f"outlook.{tld}" for tld in (
        "at", "be", "cl", "co.il", "co.nz", "co.th", "com", "com.ar", "com.au",
        "com.br", "com.gr", "com.pe", "com.tr", "com.vn", "cz", "de", "dk", "es",
        "fr", "hu", "id", "ie", "in", "it", "jp", "kr", "lv", "my", "ph", "pt",
        "sa", "sg", "sk",
    )]
    + [f"live.{tld}" for tld in (
        "be", "co.uk", "com", "com.ar", "com.mx", "de", "es", "eu", "fr", "it", "nl",
    )]
    + ["msn.com", "passport.com"]
)


def normalize_email(email: str) -> str:
    """
    Canonical form of an address, so that aliases of one mailbox collide
    on the unique `correo` column.

    Everything is lowercased. Known providers also drop subaddresses:
    - gmail/googlemail: `+tag` and dots removed, googlemail -> gmail
    - outlook/hotmail/live, icloud: `+tag` removed
    - yahoo: the last `-tag` removed
    - yandex: every yandex domain -> yandex.ru

    Raises ValueError when nothing is left of the local part.
    """
    address = (email or "").strip().lower()
    local, sep, domain = address.rpartition("@")
    if not sep:
        return address

    if domain in GMAIL_DOMAINS:
        local = local.split("+", 1)[0].replace(".", "")
        domain = "gmail.com"
    elif domain in OUTLOOK_DOMAINS or domain in ICLOUD_DOMAINS:
        local = local.split("+", 1)[0]
    elif domain in YAHOO_DOMAINS:
        pieces = local.split("-")
        local = "-".join(pieces[:-1]) if len(pieces) > 1 else pieces[0]
    elif domain in YANDEX_DOMAINS:
        domain = "yandex.ru"
    else:
        return address

    if not local:
        raise ValueError("correo has an empty mailbox name")
    return f"{local}@{domain}"


def _checked_email(value: str) -> str:
    email = normalize_email(value)
    if len(email) > MAX_EMAIL_LENGTH:
        raise ValueError(f"correo must be at most {MAX_EMAIL_LENGTH} characters")
    return email


def _strip(value: object) -> object:
    return value.strip() if isinstance(value, str) else value


class UserCreate(BaseModel):
    nombre: Name
    apellido: Name
    correo: EmailStr

    @field_validator("correo", mode="before")
    @classmethod
    def _strip_correo(cls, value: object) -> object:
        return _strip(value)

    @field_validator("correo")
    @classmethod
    def _normalize_correo(cls, value: str) -> str:
        return _checked_email(value)


class UserUpdate(BaseModel):
    """
    Partial update: only fields present in the request body are applied.
    An explicit null is rejected; omit the field to leave it unchanged.
    """

    nombre: Name | None = None
    apellido: Name | None = None
    correo: EmailStr | None = None

    @field_validator("nombre", "apellido", "correo", mode="before")
    @classmethod
    def _reject_null(cls, value: object) -> object:
        if value is None:
            raise ValueError("must not be null")
        return _strip(value)

    @field_validator("correo")
    @classmethod
    def _normalize_correo(cls, value: str | None) -> str | None:
        return _checked_email(value) if value is not None else None

    def changes(self) -> dict[str, object]:
        return self.model_dump(exclude_unset=True)


class UserResponse(BaseModel):
    id: int
    nombre: str
    apellido: str
    correo: str
    fecha_creacion: datetime | None = None


class UserCreatedResponse(BaseModel):
    id: int
    nombre: str
    apellido: str
    correo: str
