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
Storefront SDK Wire Models

Pydantic models for the messages exchanged with the shop and telemetry APIs.
Field names are snake_case in Python and camelCase on the wire.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class WireModel(BaseModel):
    """Base for wire messages: absent fields are dropped, never sent as null."""

    model_config = ConfigDict(populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


# -- Analytics context -- #


class VersionSpec(WireModel):
    name: str | None = None


class CollectionMessage(WireModel):
    name: str


class UserKeyMessage(WireModel):
    uid: str


class OrderKeyMessage(WireModel):
    id: str


class ScopeMessage(WireModel):
    partner: str | None = None
    commercial: str | None = None


class DeviceOS(WireModel):
    type: str
    version: VersionSpec | None = None


class DeviceApplication(WireModel):
    origin: str | None = None


class DeviceLibrary(WireModel):
    variant: str | None = None
    version: VersionSpec | None = None


class BrowserDeviceContext(WireModel):
    browser_type: str = Field(..., alias="browserType")
    device_type: str = Field(..., alias="deviceType")
    version: VersionSpec | None = None
    os: DeviceOS
    app: DeviceApplication
    library: DeviceLibrary


class AnalyticsContext(WireModel):
    """Exported event context as carried inside a telemetry envelope."""

    collection: CollectionMessage | None = None
    fingerprint: str | None = None
    group: str | None = None
    user: UserKeyMessage | None = None
    order: OrderKeyMessage | None = None
    scope: ScopeMessage | None = None
    browser: BrowserDeviceContext | None = None


# -- Telemetry envelope -- #


class GenericEvent(WireModel):
    """Free-form analytics event."""

    payload: dict[str, Any] | None = None
    occurred: int | None = Field(None, description="Client timestamp, epoch milliseconds")


class GenericException(WireModel):
    """Client-side error report."""

    message: str
    fatal: bool = False
    payload: dict[str, Any] | None = None
    occurred: int | None = None


class TelemetryEvent(WireModel):
    """Outbound envelope: exactly one of ``generic``/``error`` is set."""

    generic: GenericEvent | None = None
    error: GenericException | None = None
    context: AnalyticsContext | None = None


# -- Shop: enrollment -- #


class NameMessage(WireModel):
    first_name: str = Field(..., alias="firstName")
    last_name: str = Field(..., alias="lastName")


class DateMessage(WireModel):
    iso8601: str


class EmailMessage(WireModel):
    address: str


class PhoneMessage(WireModel):
    e164: str


class WebsiteMessage(WireModel):
    uri: str


class AddressMessage(WireModel):
    first_line: str = Field(..., alias="firstLine")
    second_line: str | None = Field(None, alias="secondLine")
    city: str
    state: str
    zipcode: str
    country: str | None = None


class LocationMessage(WireModel):
    address: AddressMessage


class ContactMessage(WireModel):
    email: EmailMessage | None = None
    phone: PhoneMessage | None = None
    location: LocationMessage | None = None
    website: WebsiteMessage | None = None


class PersonMessage(WireModel):
    name: NameMessage
    contact: ContactMessage
    date_of_birth: DateMessage = Field(..., alias="dateOfBirth")


class DoctorMessage(WireModel):
    name: NameMessage
    contact: ContactMessage


class DoctorRecMessage(WireModel):
    id: str
    expiration_date: DateMessage = Field(..., alias="expirationDate")
    state: str
    country: str | None = None
    doctor: DoctorMessage


class LicenseMessage(WireModel):
    id: str
    expire_date: DateMessage = Field(..., alias="expireDate")
    birth_date: DateMessage = Field(..., alias="birthDate")
    jurisdiction: str


class EnrollRequest(WireModel):
    person: PersonMessage
    source: str
    channel: str
    doctor_rec: DoctorRecMessage = Field(..., alias="doctorRec")
    license: LicenseMessage
    partner_code: str = Field(..., alias="partnerCode")
    location_code: str = Field(..., alias="locationCode")
    password: str | None = None
    dry_run: bool | None = Field(None, alias="dryRun")


class EnrollResponse(WireModel):
    """Either ``error`` is set, or ``id`` and ``foreign_id`` identify the new member."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    error: Any = None
    id: str | None = None
    foreign_id: str | None = Field(None, alias="foreignId")
