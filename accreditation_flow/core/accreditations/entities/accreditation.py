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

"""Accreditation aggregate root entity."""

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional

from ..value_objects import AccreditationId, Status, Zone
from .vehicle import Vehicle


@dataclass
class Accreditation:
    """Accreditation aggregate root.

    Represents a vehicle access request travelling through the site, with
    lifecycle status, current zone and optimistic locking.

    Status and zone only change through the status machine; descriptive
    fields are edited directly but still go through the concurrency guard.

    Attributes:
        accreditation_id: Unique accreditation identifier.
        company: Requesting company.
        stand: Stand being delivered.
        unloading: Unloading mode requested.
        event: Event the delivery belongs to.
        status: Current lifecycle status.
        current_zone: Zone assigned to the vehicle, if any.
        message: Free-text note.
        email: Contact address.
        consent: Data processing consent flag.
        is_archived: Hidden from the default listing when True.
        vehicles: Owned vehicles.
        entry_at: First entry on site (quick display field).
        exit_at: Most recent exit (quick display field).
        created_at: Creation timestamp.
        updated_at: Last modification timestamp.
        version: Optimistic locking version.
    """

    accreditation_id: AccreditationId
    company: str
    stand: str
    unloading: str
    event: str
    status: Status = Status.NOUVEAU
    current_zone: Optional[Zone] = None
    message: str = ""
    email: Optional[str] = None
    consent: bool = True
    is_archived: bool = False
    vehicles: List[Vehicle] = field(default_factory=list)
    entry_at: Optional[datetime] = None
    exit_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    version: int = 1

    DETAIL_FIELDS = ("company", "stand", "unloading", "event", "message", "email")

    def __post_init__(self) -> None:
        if self.created_at is None:
            self.created_at = datetime.now(timezone.utc)
        if self.updated_at is None:
            self.updated_at = self.created_at

    def assign_zone(self, zone: Zone) -> None:
        """Set the zone the vehicle is expected in."""
        self.current_zone = zone

    def mark_entered(self, at: datetime) -> None:
        """Move to ENTREE, keeping the first entry time."""
        self.status = Status.ENTREE
        if self.entry_at is None:
            self.entry_at = at

    def mark_exited(self, at: datetime) -> None:
        """Move to SORTIE, recording the most recent exit time."""
        self.status = Status.SORTIE
        self.exit_at = at

    def update_details(self, **details: Optional[str]) -> None:
        """Apply descriptive field edits.

        None values leave the field untouched.

        Raises:
            ValueError: If a field is not a descriptive field.
        """
        for name, value in details.items():
            if name not in self.DETAIL_FIELDS:
                raise ValueError(f"Not an editable accreditation field: {name}")
            if value is not None:
                setattr(self, name, value)

    def set_archived(self, archived: bool) -> None:
        """Archive or restore the accreditation; status and zone are kept."""
        self.is_archived = archived

    def replace_vehicles(self, vehicles: List[Vehicle]) -> None:
        """Replace owned vehicles."""
        self.vehicles = list(vehicles)

    def touch(self, at: datetime) -> None:
        """Bump version and timestamp after an accepted mutation."""
        self.updated_at = at
        self.version += 1

    def snapshot(self) -> Dict[str, str]:
        """Serialize tracked fields for change detection and history.

        Returns:
            Field name to string value, empty string for unset values.
        """
        values = {
            "status": self.status.value,
            "currentZone": self.current_zone.value if self.current_zone else "",
        }
        for name in self.DETAIL_FIELDS:
            values[name] = getattr(self, name) or ""
        values["isArchived"] = "true" if self.is_archived else "false"
        values["vehicles"] = json.dumps(
            [vehicle.to_dict() for vehicle in self.vehicles],
            sort_keys=True,
            ensure_ascii=False,
        )
        return values

    def is_terminal(self) -> bool:
        """Check if accreditation is in an absorbing status."""
        return self.status.is_terminal()
