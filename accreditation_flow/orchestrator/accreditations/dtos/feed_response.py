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


"""Response DTOs for the duplicate check and the recent-changes feed."""

from dataclasses import dataclass
from typing import List, Optional

# Event type published for each history action.
EVENT_TYPES = {
    "CREATED": "created",
    "STATUS_CHANGED": "status_change",
    "INFO_UPDATED": "info_updated",
    "ZONE_CHANGED": "zone_change",
    "ZONE_TRANSFER": "zone_transfer",
    "ARCHIVED": "archived",
}


@dataclass(frozen=True)
class DuplicateVehicleResponse:
    """Vehicle summary shown next to a possible duplicate."""

    plate: str
    size: str
    trailer_plate: Optional[str]
    city: str


@dataclass(frozen=True)
class DuplicateResponse:
    """Active accreditation matching a new request's company and plate.

    Attributes:
        accreditation_id: Matching accreditation.
        company: Company as stored.
        stand: Stand being delivered.
        event: Event the delivery belongs to.
        status: Current lifecycle status.
        current_zone: Assigned zone, None when unassigned.
        created_at: Creation timestamp (ISO 8601).
        vehicles: Vehicle summaries.
    """

    accreditation_id: str
    company: str
    stand: str
    event: str
    status: str
    current_zone: Optional[str]
    created_at: str
    vehicles: List[DuplicateVehicleResponse]

    @staticmethod
    def from_entity(accreditation) -> "DuplicateResponse":
        """Create response DTO from Accreditation entity."""
        zone = accreditation.current_zone
        return DuplicateResponse(
            accreditation_id=str(accreditation.accreditation_id),
            company=accreditation.company,
            stand=accreditation.stand,
            event=accreditation.event,
            status=accreditation.status.value,
            current_zone=zone.value if zone is not None else None,
            created_at=accreditation.created_at.isoformat(),
            vehicles=[
                DuplicateVehicleResponse(
                    plate=vehicle.plate,
                    size=vehicle.size,
                    trailer_plate=vehicle.trailer_plate,
                    city=vehicle.city,
                )
                for vehicle in accreditation.vehicles
            ],
        )


@dataclass(frozen=True)
class ChangeEventResponse:
    """One history entry published to polling clients.

    Status, zone and company describe the accreditation as it is now, not
    as it was when the entry was written.

    Attributes:
        type: Event type derived from the history action.
        accreditation_id: Accreditation the entry belongs to.
        action: History action.
        field: Changed field, when the entry records a field change.
        old_value: Previous serialized value.
        new_value: New serialized value.
        description: Human-readable description.
        zone: Current zone of the accreditation.
        company: Company of the accreditation.
        status: Current status of the accreditation.
        timestamp: Entry time (ISO 8601).
    """

    type: str
    accreditation_id: str
    action: str
    field: Optional[str]
    old_value: Optional[str]
    new_value: Optional[str]
    description: str
    zone: Optional[str]
    company: str
    status: str
    timestamp: str

    @staticmethod
    def from_entities(entry, accreditation) -> "ChangeEventResponse":
        """Create response DTO from a HistoryEntry and its Accreditation."""
        zone = accreditation.current_zone
        return ChangeEventResponse(
            type=EVENT_TYPES.get(entry.action.value, "update"),
            accreditation_id=str(entry.accreditation_id),
            action=entry.action.value,
            field=entry.field,
            old_value=entry.old_value,
            new_value=entry.new_value,
            description=entry.description,
            zone=zone.value if zone is not None else None,
            company=accreditation.company,
            status=accreditation.status.value,
            timestamp=entry.timestamp.isoformat(),
        )


@dataclass(frozen=True)
class ChangesResponse:
    """Recent-changes feed page.

    Attributes:
        events: Change events, oldest first.
        server_time: Reading time (ISO 8601); the next poll passes it as ``since``.
    """

    events: List[ChangeEventResponse]
    server_time: str
