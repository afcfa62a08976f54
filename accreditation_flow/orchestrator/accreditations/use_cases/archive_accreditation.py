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


"""ArchiveAccreditation use case implementation."""

from datetime import datetime
from typing import List, Optional

from accreditation_flow.core.accreditations.entities import Accreditation, ZoneMovement

from ..commands import ArchiveAccreditationCommand
from ..dtos import MutationResult
from ..guard import ConcurrencyGuard


class ArchiveAccreditationUseCase:
    """Use case archiving or restoring an accreditation.

    Archiving hides the accreditation from the default listing and from
    the duplicate check. It is a versioned edit like any other and writes
    one ARCHIVED history entry; status, zone and the movement log are left
    untouched, so terminal accreditations can be archived too.
    """

    def __init__(self, guard: ConcurrencyGuard) -> None:
        self._guard = guard

    def execute(self, command: ArchiveAccreditationCommand) -> MutationResult:
        """Execute the archive flag change.

        Args:
            command: ArchiveAccreditation command.

        Returns:
            MutationResult; ``changed`` is False when the flag already had
            the requested value.
        """

        def mutate(
            accreditation: Accreditation,
            last_movement: Optional[ZoneMovement],
            at: datetime,
        ) -> List[ZoneMovement]:
            accreditation.set_archived(command.archive)
            return []

        return self._guard.run(
            command.accreditation_id,
            command.expected_version,
            mutate,
            actor=command.actor,
            correlation_id=command.correlation_id,
        )
