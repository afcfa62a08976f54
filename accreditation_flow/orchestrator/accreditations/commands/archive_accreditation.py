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


"""ArchiveAccreditation command DTO."""

from dataclasses import dataclass
from typing import Optional

from accreditation_flow.core.accreditations.value_objects import AccreditationId, ActorId


@dataclass(frozen=True)
class ArchiveAccreditationCommand:
    """Command archiving or restoring an accreditation.

    Attributes:
        accreditation_id: Accreditation to archive or restore.
        expected_version: Version the caller read.
        actor: Agent performing the change.
        archive: True to archive, False to restore.
        correlation_id: Request correlation identifier for tracing.
    """

    accreditation_id: AccreditationId
    expected_version: int
    actor: ActorId
    archive: bool
    correlation_id: Optional[str] = None
