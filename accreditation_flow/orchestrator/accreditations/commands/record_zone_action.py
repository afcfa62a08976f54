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

"""RecordZoneAction command DTO."""

from dataclasses import dataclass
from typing import Optional

from accreditation_flow.core.accreditations.value_objects import (
    AccreditationId,
    ActorId,
    MovementAction,
)


@dataclass(frozen=True)
class RecordZoneActionCommand:
    """Command recording a vehicle entering or leaving a zone.

    Attributes:
        accreditation_id: Accreditation of the vehicle.
        expected_version: Version the caller read.
        actor: Agent recording the action.
        action: ENTRY or EXIT.
        zone: Zone of the gate, raw value as received.
        correlation_id: Request correlation identifier for tracing.
    """

    accreditation_id: AccreditationId
    expected_version: int
    actor: ActorId
    action: MovementAction
    zone: str
    correlation_id: Optional[str] = None
