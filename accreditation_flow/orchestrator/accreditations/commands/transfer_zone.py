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

"""TransferZone command DTO."""

from dataclasses import dataclass
from typing import Optional

from accreditation_flow.core.accreditations.value_objects import AccreditationId, ActorId


@dataclass(frozen=True)
class TransferZoneCommand:
    """Command sending an exited vehicle to another zone.

    Attributes:
        accreditation_id: Accreditation of the vehicle.
        expected_version: Version the caller read.
        actor: Agent ordering the transfer.
        target_zone: Destination zone, raw value as received.
        reason: Optional free text kept in the history description.
        correlation_id: Request correlation identifier for tracing.
    """

    accreditation_id: AccreditationId
    expected_version: int
    actor: ActorId
    target_zone: str
    reason: Optional[str] = None
    correlation_id: Optional[str] = None
