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

"""Shop API senders: enrollment, zipcode eligibility and shop status."""

from .customer import Customer
from .enroll import Enrollment, EnrollmentSource
from .info import ShopStatus, shop_availability, shop_info
from .zipcheck import validate_zipcode, zipcheck

__all__ = [
    "Customer",
    "Enrollment",
    "EnrollmentSource",
    "ShopStatus",
    "shop_availability",
    "shop_info",
    "validate_zipcode",
    "zipcheck",
]
