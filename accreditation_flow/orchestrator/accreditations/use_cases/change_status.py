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

"""ChangeStatus use case implementation."""

from datetime import datetime
from typing import List, Optional

from accreditation_flow.core.accreditations.entities import Accreditation, ZoneMovement
from accreditation_flow.core.accreditations.status_machine import StatusMachine

from ..commands import ChangeStatusCommand
from ..dtos import MutationResult
from ..guard import ConcurrencyGuard


class ChangeStatusUseCase:
    """Use case for the generic accreditation edit.

    A status different from the stored one goes through the status machine;
    the same status with another zone is a zone reassignment (waiting
    vehicles only); descriptive fields and vehicles are applied on top in
    the same transaction. A request matching the stored state writes
    nothing and keeps the version.

    Attributes:
        guard: Concurrency guard running the mutation.
        status_machine: Transition rules.
    """

    def __init__(self, guard: ConcurrencyGuard, status_machine: StatusMachine) -> None:
        self._guard = guard
        self._status_machine = status_machine

    def execute(self, command: ChangeStatusCommand) -> MutationResult:
        """Execute the edit.

        Args:
            command: ChangeStatus command.

        Returns:
            MutationResult with the committed accreditation, or the
            NotFound / Conflict / InvalidTransition / InvalidZone error.
        """

        def mutate(
            accreditation: Accreditation,
            last_movement: Optional[ZoneMovement],
            at: datetime,
        ) -> List[ZoneMovement]:
            movements = self._apply_status(accreditation, command, last_movement, at)
            accreditation.update_details(**command.details())
            if command.vehicles is not None:
                accreditation.replace_vehicles(list(command.vehicles))
            return movements

        return self._guard.run(
            command.accreditation_id,
            command.expected_version,
            mutate,
            actor=command.actor,
            correlation_id=command.correlation_id,
        )

    def _apply_status(
        self,
        accreditation: Accreditation,
        command: ChangeStatusCommand,
        last_movement: Optional[ZoneMovement],
        at: datetime,
    ) -> List[ZoneMovement]:
        if command.status is not None and command.status != accreditation.status:
            return self._status_machine.transition(
                accreditation,
                command.status,
                command.zone,
                last_movement=last_movement,
                at=at,
            )
        if command.zone:
            zone = self._status_machine.zone_graph.parse(command.zone)
            if zone != accreditation.current_zone:
                self._status_machine.reassign_zone(accreditation, zone)
        return []
