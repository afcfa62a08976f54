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

"""Accreditation status machine.

Validates status and zone transitions against an explicit table and
applies them to the aggregate, returning the movement log entries the
transition produces. Nothing is persisted here; the caller appends the
returned movements inside the same transaction as the aggregate update.
"""

import logging
from datetime import datetime
from typing import Callable, Dict, List, Optional, Tuple, Union

from .entities import Accreditation, ZoneMovement
from .exceptions import (
    InvalidStateTransitionError,
    InvalidZoneError,
    TerminalStateViolationError,
)
from .value_objects import MovementAction, Status, Zone
from .zone_graph import ZoneGraph

logger = logging.getLogger(__name__)

ZoneInput = Union[Zone, str, None]
_Handler = Callable[
    ["StatusMachine", Accreditation, ZoneInput, Optional[ZoneMovement], datetime],
    List[ZoneMovement],
]


class StatusMachine:
    """Status and zone transition rules for accreditations.

    The machine never trusts the caller's idea of the current state: it is
    always handed the aggregate as read inside the guarded transaction,
    together with the last movement of its log.

    Attributes:
        zone_graph: Zone topology used for zone legality.
    """

    def __init__(self, zone_graph: ZoneGraph) -> None:
        self.zone_graph = zone_graph

    def transition(
        self,
        accreditation: Accreditation,
        target_status: Status,
        target_zone: ZoneInput = None,
        *,
        last_movement: Optional[ZoneMovement] = None,
        at: datetime,
    ) -> List[ZoneMovement]:
        """Apply a status transition.

        Args:
            accreditation: Aggregate as currently persisted; mutated in place.
            target_status: Requested status.
            target_zone: Requested zone, when the transition takes one.
            last_movement: Most recent movement of the accreditation, if any.
            at: Transition timestamp.

        Returns:
            Movements to append to the log (possibly empty).

        Raises:
            TerminalStateViolationError: If the accreditation is REFUS or ABSENT.
            InvalidStateTransitionError: If the table has no such row.
            InvalidZoneError: If the zone is missing, unknown or not reachable.
        """
        current = accreditation.status
        if accreditation.is_terminal():
            raise TerminalStateViolationError(
                accreditation_id=str(accreditation.accreditation_id),
                state=current.value,
                to_state=target_status.value,
            )

        handler = _TRANSITIONS.get((current, target_status))
        if handler is None:
            raise InvalidStateTransitionError(
                accreditation_id=str(accreditation.accreditation_id),
                from_state=current.value,
                to_state=target_status.value,
            )

        movements = handler(self, accreditation, target_zone, last_movement, at)
        logger.debug(
            "Accreditation %s moved %s -> %s with %d movement(s)",
            accreditation.accreditation_id,
            current.value,
            target_status.value,
            len(movements),
        )
        return movements

    def reassign_zone(self, accreditation: Accreditation, zone: ZoneInput) -> None:
        """Change the assigned zone of a waiting vehicle.

        No movement is produced: the vehicle has not arrived yet.

        Raises:
            TerminalStateViolationError: If the accreditation is REFUS or ABSENT.
            InvalidStateTransitionError: If the accreditation is not ATTENTE.
            InvalidZoneError: If the zone is invalid or already assigned.
        """
        self._require_status(accreditation, Status.ATTENTE, accreditation.status)
        new_zone = self.zone_graph.parse(zone)
        if new_zone == accreditation.current_zone:
            raise InvalidZoneError(new_zone.value, "zone is already assigned")
        accreditation.assign_zone(new_zone)

    def transfer(
        self,
        accreditation: Accreditation,
        target_zone: ZoneInput,
        *,
        at: datetime,
    ) -> List[ZoneMovement]:
        """Send an exited vehicle into another zone.

        Raises:
            TerminalStateViolationError: If the accreditation is REFUS or ABSENT.
            InvalidStateTransitionError: If the accreditation is not SORTIE.
            InvalidZoneError: If the target is not a transfer target.
        """
        self._require_status(accreditation, Status.SORTIE, Status.ENTREE)
        return self.transition(accreditation, Status.ENTREE, target_zone, at=at)

    def apply_action(
        self,
        accreditation: Accreditation,
        action: MovementAction,
        zone: ZoneInput,
        *,
        last_movement: Optional[ZoneMovement] = None,
        at: datetime,
    ) -> List[ZoneMovement]:
        """Apply a zone entry/exit action recorded at a gate.

        ENTRY is an arrival from ATTENTE or a re-entry (transfer) from
        SORTIE; EXIT is a departure from ENTREE.

        Raises:
            InvalidStateTransitionError: If the action does not match the status.
            InvalidZoneError: If the zone does not match or is not reachable.
        """
        if action == MovementAction.EXIT:
            return self.transition(
                accreditation, Status.SORTIE, zone, last_movement=last_movement, at=at
            )
        if accreditation.status == Status.SORTIE:
            return self.transfer(accreditation, zone, at=at)
        return self.transition(
            accreditation, Status.ENTREE, zone, last_movement=last_movement, at=at
        )

    def _require_status(
        self,
        accreditation: Accreditation,
        required: Status,
        target: Status,
    ) -> None:
        if accreditation.is_terminal():
            raise TerminalStateViolationError(
                accreditation_id=str(accreditation.accreditation_id),
                state=accreditation.status.value,
                to_state=target.value,
            )
        if accreditation.status != required:
            raise InvalidStateTransitionError(
                accreditation_id=str(accreditation.accreditation_id),
                from_state=accreditation.status.value,
                to_state=target.value,
            )

    def _validate_request(
        self,
        accreditation: Accreditation,
        zone: ZoneInput,
        last_movement: Optional[ZoneMovement],
        at: datetime,
    ) -> List[ZoneMovement]:
        new_zone = self.zone_graph.parse(zone)
        first_assignment = accreditation.current_zone is None and last_movement is None
        accreditation.status = Status.ATTENTE
        accreditation.assign_zone(new_zone)
        if not first_assignment:
            return []
        return [ZoneMovement.entry(accreditation.accreditation_id, new_zone, None, at)]

    def _refuse(
        self,
        accreditation: Accreditation,
        zone: ZoneInput,
        last_movement: Optional[ZoneMovement],
        at: datetime,
    ) -> List[ZoneMovement]:
        accreditation.status = Status.REFUS
        return []

    def _mark_absent(
        self,
        accreditation: Accreditation,
        zone: ZoneInput,
        last_movement: Optional[ZoneMovement],
        at: datetime,
    ) -> List[ZoneMovement]:
        accreditation.status = Status.ABSENT
        return []

    def _arrive(
        self,
        accreditation: Accreditation,
        zone: ZoneInput,
        last_movement: Optional[ZoneMovement],
        at: datetime,
    ) -> List[ZoneMovement]:
        if zone is not None:
            requested = self.zone_graph.parse(zone)
            if requested != accreditation.current_zone:
                accreditation.assign_zone(requested)

        target = accreditation.current_zone
        accreditation.mark_entered(at)
        if target is None:
            return []

        acc_id = accreditation.accreditation_id
        open_zone = _open_zone(last_movement)
        if open_zone == target:
            # entry already logged when the zone was first assigned
            return []
        if open_zone is not None:
            return [
                ZoneMovement.exit(acc_id, open_zone, at),
                ZoneMovement.entry(acc_id, target, open_zone, at),
            ]
        from_zone = last_movement.zone if last_movement is not None else None
        return [ZoneMovement.entry(acc_id, target, from_zone, at)]

    def _depart(
        self,
        accreditation: Accreditation,
        zone: ZoneInput,
        last_movement: Optional[ZoneMovement],
        at: datetime,
    ) -> List[ZoneMovement]:
        current_zone = accreditation.current_zone
        if zone is not None:
            requested = self.zone_graph.parse(zone)
            if requested != current_zone:
                raise InvalidZoneError(requested.value, "vehicle is not in this zone")

        accreditation.mark_exited(at)
        if current_zone is None:
            return []

        open_zone = _open_zone(last_movement)
        if open_zone is None:
            logger.warning(
                "Accreditation %s leaves %s without a logged entry; exit kept on record only",
                accreditation.accreditation_id,
                current_zone.value,
            )
            return []
        return [ZoneMovement.exit(accreditation.accreditation_id, open_zone, at)]

    def _re_enter(
        self,
        accreditation: Accreditation,
        zone: ZoneInput,
        last_movement: Optional[ZoneMovement],
        at: datetime,
    ) -> List[ZoneMovement]:
        target = self.zone_graph.parse(zone)
        from_zone = accreditation.current_zone
        if from_zone is None:
            legal = self.zone_graph.all_zones()
        else:
            legal = self.zone_graph.transfer_targets(from_zone)

        if target not in legal:
            if self.zone_graph.is_final_destination(from_zone):
                reason = "vehicle already reached the final destination"
            else:
                reason = f"not a transfer target from {from_zone.value if from_zone else 'no zone'}"
            raise InvalidZoneError(target.value, reason)

        accreditation.assign_zone(target)
        accreditation.mark_entered(at)
        return [ZoneMovement.entry(accreditation.accreditation_id, target, from_zone, at)]


def _open_zone(last_movement: Optional[ZoneMovement]) -> Optional[Zone]:
    """Zone of the unmatched trailing ENTRY, if the log ends with one."""
    if last_movement is not None and last_movement.is_entry():
        return last_movement.zone
    return None


_TRANSITIONS: Dict[Tuple[Status, Status], _Handler] = {
    (Status.NOUVEAU, Status.ATTENTE): StatusMachine._validate_request,
    (Status.NOUVEAU, Status.REFUS): StatusMachine._refuse,
    (Status.ATTENTE, Status.ENTREE): StatusMachine._arrive,
    (Status.ATTENTE, Status.ABSENT): StatusMachine._mark_absent,
    (Status.ENTREE, Status.SORTIE): StatusMachine._depart,
    (Status.SORTIE, Status.ENTREE): StatusMachine._re_enter,
}
