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

"""Accreditation response DTO."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional


def _iso(moment: Optional[datetime]) -> Optional[str]:
    return moment.isoformat() if moment is not None else None


@dataclass(frozen=True)
class AccreditationResponse:
    """Response DTO for accreditation operations.

    Immutable data transfer object for returning accreditation information
    to the API layer. All timestamps are ISO 8601 formatted strings.

    Attributes:
        accreditation_id: Unique accreditation identifier.
        status: Current lifecycle status.
        current_zone: Assigned zone, None when unassigned.
        company: Requesting company.
        stand: Stand being delivered.
        unloading: Unloading mode.
        event: Event the delivery belongs to.
        message: Free-text note.
        email: Contact address.
        consent: Data processing consent flag.
        is_archived: Archive flag.
        vehicles: Vehicles serialized as dictionaries.
        entry_at: First entry on site (ISO 8601).
        exit_at: Most recent exit (ISO 8601).
        created_at: Creation timestamp (ISO 8601).
        updated_at: Last modification timestamp (ISO 8601).
        version: Optimistic locking version.
    """

    accreditation_id: str
    status: str
    current_zone: Optional[str]
    company: str
    stand: str
    unloading: str
    event: str
    message: str
    email: Optional[str]
    consent: bool
    is_archived: bool
    vehicles: List[Dict[str, Any]]
    entry_at: Optional[str]
    exit_at: Optional[str]
    created_at: str
    updated_at: str
    version: int

    @staticmethod
    def from_entity(accreditation) -> "AccreditationResponse":
        """Create response DTO from Accreditation entity.

        Args:
            accreditation: Accreditation domain entity.

        Returns:
            AccreditationResponse DTO with serialized values.
        """
        vehicles = []
        for vehicle in accreditation.vehicles:
            data = vehicle.to_dict()
            data["id"] = vehicle.vehicle_id
            vehicles.append(data)

        zone = accreditation.current_zone
        return AccreditationResponse(
            accreditation_id=str(accreditation.accreditation_id),
            status=accreditation.status.value,
            current_zone=zone.value if zone is not None else None,
            company=accreditation.company,
            stand=accreditation.stand,
            unloading=accreditation.unloading,
            event=accreditation.event,
            message=accreditation.message,
            email=accreditation.email,
            consent=accreditation.consent,
            is_archived=accreditation.is_archived,
            vehicles=vehicles,
            entry_at=_iso(accreditation.entry_at),
            exit_at=_iso(accreditation.exit_at),
            created_at=accreditation.created_at.isoformat(),
            updated_at=accreditation.updated_at.isoformat(),
            version=accreditation.version,
        )
