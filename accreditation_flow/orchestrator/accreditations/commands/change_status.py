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

"""ChangeStatus command DTO."""

from dataclasses import dataclass
from typing import Optional, Tuple

from accreditation_flow.core.accreditations.entities import Vehicle
from accreditation_flow.core.accreditations.value_objects import (
    AccreditationId,
    ActorId,
    Status,
)


@dataclass(frozen=True)
class ChangeStatusCommand:
    """Command to change status, zone or descriptive fields of an accreditation.

    Every field left to None is untouched. A status equal to the current one
    is not a transition: only the zone and field edits apply.

    Attributes:
        accreditation_id: Accreditation to modify.
        expected_version: Version the caller read.
        actor: Agent performing the change.
        status: Requested status.
        zone: Requested zone, raw value as received.
        company: New company name.
        stand: New stand.
        unloading: New unloading mode.
        event: New event.
        message: New free-text note.
        email: New contact address.
        vehicles: Replacement vehicle list.
        correlation_id: Request correlation identifier for tracing.
    """

    accreditation_id: AccreditationId
    expected_version: int
    actor: ActorId
    status: Optional[Status] = None
    zone: Optional[str] = None
    company: Optional[str] = None
    stand: Optional[str] = None
    unloading: Optional[str] = None
    event: Optional[str] = None
    message: Optional[str] = None
    email: Optional[str] = None
    vehicles: Optional[Tuple[Vehicle, ...]] = None
    correlation_id: Optional[str] = None

    def details(self) -> dict:
        """Return descriptive field edits, None meaning untouched."""
        return {
            "company": self.company,
            "stand": self.stand,
            "unloading": self.unloading,
            "event": self.event,
            "message": self.message,
            "email": self.email,
        }
