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

"""Zone movement entity."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..value_objects import AccreditationId, MovementAction, Zone


@dataclass(frozen=True)
class ZoneMovement:
    """Immutable movement log record.

    An EXIT records the zone being left as both ``from_zone`` and
    ``to_zone``. ``from_zone`` is None only on the very first entry.

    Attributes:
        accreditation_id: Owning accreditation.
        action: ENTRY or EXIT.
        from_zone: Zone the vehicle came from.
        to_zone: Zone entered (ENTRY) or left (EXIT).
        timestamp: When the movement happened.
        movement_id: Store-assigned identifier, None until appended.
    """

    accreditation_id: AccreditationId
    action: MovementAction
    from_zone: Optional[Zone]
    to_zone: Zone
    timestamp: datetime
    movement_id: Optional[int] = None

    @classmethod
    def entry(
        cls,
        accreditation_id: AccreditationId,
        to_zone: Zone,
        from_zone: Optional[Zone],
        timestamp: datetime,
    ) -> "ZoneMovement":
        """Build an ENTRY into ``to_zone``."""
        return cls(accreditation_id, MovementAction.ENTRY, from_zone, to_zone, timestamp)

    @classmethod
    def exit(
        cls,
        accreditation_id: AccreditationId,
        zone: Zone,
        timestamp: datetime,
    ) -> "ZoneMovement":
        """Build an EXIT out of ``zone``."""
        return cls(accreditation_id, MovementAction.EXIT, zone, zone, timestamp)

    @property
    def zone(self) -> Zone:
        """Zone this movement is about."""
        return self.to_zone

    def is_entry(self) -> bool:
        """Check if movement is an ENTRY."""
        return self.action == MovementAction.ENTRY
