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

"""Member enrollment.

Builds the ``members`` request from identity objects and reports the outcome
as ``callback(ok, error, customer)``.
"""

from __future__ import annotations

import base64
import logging
from collections.abc import Callable
from concurrent.futures import Future
from enum import Enum
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ..exceptions import ConfigurationError, ValidationError
from ..identity import ContactInfo, DoctorRec, GovernmentID, Name, Person
from ..models import (
    AddressMessage,
    ContactMessage,
    DateMessage,
    DoctorMessage,
    DoctorRecMessage,
    EmailMessage,
    EnrollRequest,
    EnrollResponse,
    LicenseMessage,
    LocationMessage,
    NameMessage,
    PersonMessage,
    PhoneMessage,
    WebsiteMessage,
)
from ..rpc import Routine, Transport
from .customer import Customer

logger = logging.getLogger(__name__)

EnrollCallback = Callable[[bool, Any, Customer | None], None]


class EnrollmentSource(Enum):
    ONLINE = "ONLINE"
    INTERNAL_APP = "INTERNAL_APP"
    PARTNER_APP = "PARTNER_APP"
    IN_STORE = "IN_STORE"


def _name(name: Name) -> NameMessage:
    return NameMessage(first_name=name.first, last_name=name.last)


def _contact(contact: ContactInfo) -> ContactMessage:
    address = contact.address
    return ContactMessage(
        email=EmailMessage(address=contact.email) if contact.email else None,
        phone=PhoneMessage(e164=contact.phone) if contact.phone else None,
        location=(
            LocationMessage(
                address=AddressMessage(
                    first_line=address.first_line,
                    second_line=address.second_line,
                    city=address.city,
                    state=address.state,
                    zipcode=address.zipcode,
                    country=address.country,
                )
            )
            if address
            else None
        ),
    )


class Enrollment:
    """A request to enroll a person as a member of the configured partner location.

    Args:
        source: Where the enrollment originated.
        channel: Free-form channel identifier within the source.
        person: The person enrolling.
        doctor_rec: Their doctor's recommendation.
        license: Their government ID.
        password: Optional account password; stored base64-encoded.
    """

    def __init__(
        self,
        source: EnrollmentSource | str,
        channel: str,
        person: Person,
        doctor_rec: DoctorRec,
        license: GovernmentID,
        password: str | None = None,
    ):
        if isinstance(source, str):
            try:
                source = EnrollmentSource[source]
            except KeyError:
                raise ValidationError(f"Invalid enrollment source: '{source}'.", field="source", value=source)
        if not isinstance(source, EnrollmentSource):
            raise ValidationError(f"Invalid enrollment source: '{source}'.", field="source", value=source)
        if not channel or not isinstance(channel, str):
            raise ValidationError(f"Invalid enrollment channel: '{channel}'.", field="channel", value=channel)
        if not isinstance(person, Person):
            raise ValidationError("Enrollment requires a person.", field="person", value=person)
        if not isinstance(doctor_rec, DoctorRec):
            raise ValidationError("Enrollment requires a doctor's recommendation.", field="doctor_rec", value=doctor_rec)
        if not isinstance(license, GovernmentID):
            raise ValidationError("Enrollment requires a government ID.", field="license", value=license)

        self.source = source
        self.channel = channel
        self.person = person
        self.doctor_rec = doctor_rec
        self.license = license
        self.password = base64.b64encode(password.encode("utf-8")).decode("ascii") if password is not None else None

        # When set, the server verifies and logs the enrollment without persisting the member.
        self.dry_run = False

    def enable_dry_run(self) -> Enrollment:
        self.dry_run = True
        return self

    def build_request(self, partner: str, location: str) -> EnrollRequest:
        rec = self.doctor_rec
        return EnrollRequest(
            person=PersonMessage(
                name=_name(self.person.name),
                contact=_contact(self.person.contact),
                date_of_birth=DateMessage(iso8601=self.person.date_of_birth.isoformat()),
            ),
            source=self.source.value,
            channel=self.channel,
            doctor_rec=DoctorRecMessage(
                id=rec.id,
                expiration_date=DateMessage(iso8601=rec.expiration_date.isoformat()),
                state=rec.state,
                country=rec.country,
                doctor=DoctorMessage(
                    name=_name(rec.doctor_name),
                    contact=ContactMessage(
                        phone=PhoneMessage(e164=rec.doctor_phone),
                        website=WebsiteMessage(uri=rec.doctor_website) if rec.doctor_website else None,
                    ),
                ),
            ),
            license=LicenseMessage(
                id=self.license.id,
                expire_date=DateMessage(iso8601=self.license.expiration_iso),
                birth_date=DateMessage(iso8601=self.license.birth_iso),
                jurisdiction=self.license.jurisdiction,
            ),
            partner_code=partner,
            location_code=location,
            password=self.password,
            dry_run=True if self.dry_run else None,
        )

    def send(self, callback: EnrollCallback, transport: Transport) -> Future | None:
        """Submit the enrollment. ``callback`` fires exactly once.

        Raises:
            ConfigurationError: If partner or location are not configured.
        """
        config = transport.config
        if not config.has_scope():
            logger.error("Partner or location code is not defined.")
            raise ConfigurationError(
                "Partner and location must be configured before enrolling a member.",
                details={"partner": config.partner, "location": config.location},
            )

        body = self.build_request(config.partner, config.location).to_wire()
        logger.info("Enrolling user via %s/%s...", self.source.value, self.channel)

        done = False
        person = self.person

        def on_success(response: Any) -> None:
            nonlocal done
            if done:
                return
            done = True

            if not isinstance(response, dict):
                logger.warning("Failed to inflate enrollment response: %r", response)
                callback(False, None, None)
                return

            try:
                inflated = EnrollResponse.model_validate(response)
            except PydanticValidationError as e:
                logger.error("Unrecognized enrollment response payload: %s", e)
                callback(False, None, None)
                return

            if inflated.error:
                callback(False, inflated.error, None)
            elif inflated.id and inflated.foreign_id:
                customer = Customer(person=person, foreign_id=inflated.foreign_id, member_id=inflated.id)
                logger.info("Decoded customer '%s' from enrollment response.", customer.foreign_id)
                callback(True, None, customer)
            else:
                logger.error("Failed to find customer or ID in enrollment response: %r", response)
                callback(False, None, None)

        def on_failure(status: int | None) -> None:
            nonlocal done
            if done:
                return
            done = True
            if status:
                logger.error("Enrollment RPC failed with unexpected status: '%s'.", status)
            else:
                logger.error("Enrollment RPC response failed to be decoded.")
            callback(False, None, None)

        return transport.call(Routine.ENROLL_USER, "POST", "members", on_success, on_failure, body=body)
