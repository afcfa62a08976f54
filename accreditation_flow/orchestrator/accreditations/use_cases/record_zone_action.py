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

"""RecordZoneAction use case implementation."""

from datetime import datetime
from typing import List, Optional

from accreditation_flow.core.accreditations.entities import Accreditation, ZoneMovement
from accreditation_flow.core.accreditations.status_machine import StatusMachine
from accreditation_flow.core.accreditations.value_objects import HistoryAction

from ..commands import RecordZoneActionCommand
from ..dtos import MutationResult
from ..guard import ConcurrencyGuard


class RecordZoneActionUseCase:
    """Use case for gate scans: a vehicle enters or leaves a zone.

    The action must match the stored status: ENTRY from ATTENTE (arrival)
    or SORTIE (re-entry), EXIT from ENTREE.
    """

    def __init__(self, guard: ConcurrencyGuard, status_machine: StatusMachine) -> None:
        self._guard = guard
        self._status_machine = status_machine

    def execute(self, command: RecordZoneActionCommand) -> MutationResult:
        """Execute the zone action.

        Args:
            command: RecordZoneAction command.

        Returns:
            MutationResult with the committed accreditation and the
            appended movements, or the domain error.
        """

        def mutate(
            accreditation: Accreditation,
            last_movement: Optional[ZoneMovement],
            at: datetime,
        ) -> List[ZoneMovement]:
            return self._status_machine.apply_action(
                accreditation,
                command.action,
                command.zone,
                last_movement=last_movement,
                at=at,
            )

        return self._guard.run(
            command.accreditation_id,
            command.expected_version,
            mutate,
            actor=command.actor,
            zone_action=HistoryAction.ZONE_CHANGED,
            correlation_id=command.correlation_id,
        )
