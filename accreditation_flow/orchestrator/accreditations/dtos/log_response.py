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

"""Movement and history response DTOs."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class MovementResponse:
    """Response DTO for a movement log entry.

    Attributes:
        movement_id: Store-assigned identifier.
        accreditation_id: Owning accreditation.
        action: ENTRY or EXIT.
        from_zone: Zone left, None on the very first entry.
        to_zone: Zone entered (the zone left, for EXIT).
        timestamp: Movement time (ISO 8601).
    """

    movement_id: Optional[int]
    accreditation_id: str
    action: str
    from_zone: Optional[str]
    to_zone: str
    timestamp: str

    @staticmethod
    def from_entity(movement) -> "MovementResponse":
        """Create response DTO from ZoneMovement entity."""
        return MovementResponse(
            movement_id=movement.movement_id,
            accreditation_id=str(movement.accreditation_id),
            action=movement.action.value,
            from_zone=movement.from_zone.value if movement.from_zone else None,
            to_zone=movement.to_zone.value,
            timestamp=movement.timestamp.isoformat(),
        )


@dataclass(frozen=True)
class HistoryEntryResponse:
    """Response DTO for a history entry.

    Attributes:
        entry_id: Store-assigned identifier.
        accreditation_id: Owning accreditation.
        action: History action.
        field: Changed field, when the entry records a field change.
        old_value: Previous serialized value.
        new_value: New serialized value.
        description: Human-readable description.
        actor: User identifier or ``system``.
        timestamp: Change time (ISO 8601).
    """

    entry_id: Optional[int]
    accreditation_id: str
    action: str
    field: Optional[str]
    old_value: Optional[str]
    new_value: Optional[str]
    description: str
    actor: str
    timestamp: str

    @staticmethod
    def from_entity(entry) -> "HistoryEntryResponse":
        """Create response DTO from HistoryEntry entity."""
        return HistoryEntryResponse(
            entry_id=entry.entry_id,
            accreditation_id=str(entry.accreditation_id),
            action=entry.action.value,
            field=entry.field,
            old_value=entry.old_value,
            new_value=entry.new_value,
            description=entry.description,
            actor=str(entry.actor),
            timestamp=entry.timestamp.isoformat(),
        )
