# Copyright 2025 Storefront SDK Contributors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Storefront SDK Identity

Value objects describing people and their identity documents. Every object
validates its input at construction and is immutable afterwards.
"""

import re
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any

from .exceptions import ValidationError

DEFAULT_COUNTRY = "USA"

_CALENDAR_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}\Z", re.ASCII)


class IDType(Enum):
    """Kinds of government-issued identity documents."""

    USDL = "USDL"
    PASSPORT = "PASSPORT"


def _require_text(field: str, value: Any, label: str) -> str:
    if not value or not isinstance(value, str):
        raise ValidationError(f"Invalid {label}: '{value}'.", field=field, value=value)
    return value


def _parse_date(field: str, value: Any, label: str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    _require_text(field, value, label)
    # calendar form only; newer interpreters also accept basic and week dates
    if not _CALENDAR_DATE.match(value):
        raise ValidationError(f"Invalid {label}: '{value}' is not a YYYY-MM-DD date.", field=field, value=value)
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValidationError(f"Invalid {label}: '{value}' is not an ISO-8601 date.", field=field, value=value)


def _set(obj: Any, name: str, value: Any) -> None:
    # frozen dataclasses normalize through object.__setattr__
    object.__setattr__(obj, name, value)


@dataclass(frozen=True)
class GovernmentID:
    """A government-issued identity document, such as a driver's license.

    Dates are given as ``YYYY-MM-DD`` strings or ``date`` objects and stored
    as ``datetime.date``.
    The jurisdiction is upper-cased and the country defaults to ``"USA"``.

    Raises:
        ValidationError: If any required field is missing or malformed.
    """

    type: IDType
    id: str
    expiration_date: date
    birth_date: date
    jurisdiction: str
    country: str | None = DEFAULT_COUNTRY

    def __post_init__(self):
        id_type = self.type
        if isinstance(id_type, str):
            try:
                id_type = IDType[id_type]
            except KeyError:
                raise ValidationError(f"Invalid ID type: '{id_type}'.", field="type", value=id_type)
        if not isinstance(id_type, IDType):
            raise ValidationError(f"Invalid ID type: '{id_type}'.", field="type", value=id_type)
        _set(self, "type", id_type)

        _require_text("id", self.id, "ID number")
        _set(self, "expiration_date", _parse_date("expiration_date", self.expiration_date, "ID expiry date"))
        _set(self, "birth_date", _parse_date("birth_date", self.birth_date, "ID birth date"))
        _set(self, "jurisdiction", _require_text("jurisdiction", self.jurisdiction, "ID issuance jurisdiction").upper())
        _set(self, "country", self.country or DEFAULT_COUNTRY)

    @property
    def expiration_iso(self) -> str:
        return self.expiration_date.isoformat()

    @property
    def birth_iso(self) -> str:
        return self.birth_date.isoformat()


@dataclass(frozen=True)
class Name:
    first: str
    last: str

    def __post_init__(self):
        _require_text("first", self.first, "first name")
        _require_text("last", self.last, "last name")


@dataclass(frozen=True)
class StreetAddress:
    first_line: str
    city: str
    state: str
    zipcode: str
    second_line: str | None = None
    country: str | None = DEFAULT_COUNTRY

    def __post_init__(self):
        _require_text("first_line", self.first_line, "street address")
        _require_text("city", self.city, "city")
        _set(self, "state", _require_text("state", self.state, "state").upper())
        _require_text("zipcode", self.zipcode, "zipcode")
        _set(self, "country", self.country or DEFAULT_COUNTRY)


@dataclass(frozen=True)
class ContactInfo:
    """How to reach a person. At least one channel must be given."""

    email: str | None = None
    phone: str | None = None
    address: StreetAddress | None = None

    def __post_init__(self):
        if not (self.email or self.phone or self.address):
            raise ValidationError("Contact info requires an email, phone or address.", field="contact", value=None)
        if self.email is not None and "@" not in self.email:
            raise ValidationError(f"Invalid email address: '{self.email}'.", field="email", value=self.email)


@dataclass(frozen=True)
class Person:
    name: Name
    contact: ContactInfo
    date_of_birth: date

    def __post_init__(self):
        if not isinstance(self.name, Name):
            raise ValidationError("Person requires a name.", field="name", value=self.name)
        if not isinstance(self.contact, ContactInfo):
            raise ValidationError("Person requires contact info.", field="contact", value=self.contact)
        _set(self, "date_of_birth", _parse_date("date_of_birth", self.date_of_birth, "birth date"))


@dataclass(frozen=True)
class DoctorRec:
    """A physician's recommendation on file for a member."""

    id: str
    expiration_date: date
    state: str
    doctor_name: Name
    doctor_phone: str
    country: str | None = DEFAULT_COUNTRY
    doctor_website: str | None = None

    def __post_init__(self):
        _require_text("id", self.id, "recommendation ID")
        _set(self, "expiration_date", _parse_date("expiration_date", self.expiration_date, "recommendation expiry date"))
        _set(self, "state", _require_text("state", self.state, "recommendation state").upper())
        if not isinstance(self.doctor_name, Name):
            raise ValidationError("Recommendation requires a doctor name.", field="doctor_name", value=self.doctor_name)
        _require_text("doctor_phone", self.doctor_phone, "doctor phone")
        _set(self, "country", self.country or DEFAULT_COUNTRY)
