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

"""History entry entity."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..value_objects import AccreditationId, ActorId, HistoryAction


@dataclass(frozen=True)
class HistoryEntry:
    """Immutable audit record for one accepted field change.

    Attributes:
        accreditation_id: Accreditation the change applies to.
        action: Kind of change.
        description: Human-readable summary.
        actor: Agent who performed the change.
        timestamp: When the change was committed.
        field: Changed field name, when the change targets a field.
        old_value: Serialized value before the change.
        new_value: Serialized value after the change.
        entry_id: Store-assigned identifier, None until recorded.
    """

    accreditation_id: AccreditationId
    action: HistoryAction
    description: str
    actor: ActorId
    timestamp: datetime
    field: Optional[str] = None
    old_value: Optional[str] = None
    new_value: Optional[str] = None
    entry_id: Optional[int] = None
