# Copyright 2026 Dell Inc. or its subsidiaries. All Rights Reserved.
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

"""CreateAccreditation command DTO."""

from dataclasses import dataclass
from typing import Optional, Tuple

from accreditation_flow.core.accreditations.entities import Vehicle
from accreditation_flow.core.accreditations.value_objects import ActorId, Status


@dataclass(frozen=True)
class CreateAccreditationCommand:
    """Command to create a new accreditation.

    Immutable command object representing the intent to create an
    accreditation. All validation is performed in the use case layer.

    Attributes:
        company: Requesting company.
        stand: Stand being delivered.
        unloading: Unloading mode.
        event: Event the delivery belongs to.
        vehicles: Vehicles of the request, at least one.
        actor: Agent creating the request.
        status: NOUVEAU for public requests, ATTENTE for staff.
        message: Free-text note.
        email: Contact address.
        consent: Data processing consent flag.
        correlation_id: Request correlation identifier for tracing.
    """

    company: str
    stand: str
    unloading: str
    event: str
    vehicles: Tuple[Vehicle, ...]
    actor: ActorId
    status: Status = Status.NOUVEAU
    message: str = ""
    email: Optional[str] = None
    consent: bool = True
    correlation_id: Optional[str] = None
