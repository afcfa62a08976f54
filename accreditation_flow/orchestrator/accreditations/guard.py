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

"""Compare-and-swap wrapper around every accreditation mutation."""

import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional

from accreditation_flow.core.accreditations.entities import Accreditation, ZoneMovement
from accreditation_flow.core.accreditations.exceptions import (
    AccreditationDomainError,
    AccreditationNotFoundError,
    OptimisticLockError,
)
from accreditation_flow.core.accreditations.repositories import UnitOfWork
from accreditation_flow.core.accreditations.services import HistoryEntryFactory
from accreditation_flow.core.accreditations.value_objects import (
    AccreditationId,
    ActorId,
    HistoryAction,
)

from .dtos import MutationResult

logger = logging.getLogger(__name__)

Mutation = Callable[[Accreditation, Optional[ZoneMovement], datetime], List[ZoneMovement]]


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


class ConcurrencyGuard:
    """Runs one mutation per transaction under an optimistic version check.

    Sequence inside a single unit of work: load the row, reject a missing
    row or a stale ``expected_version``, apply the mutation, write the row
    with a conditional version bump, append movements, record history,
    commit. Any domain error rolls the whole transaction back and is
    returned as a failed MutationResult. There is no automatic retry.

    Attributes:
        uow_factory: Creates a fresh unit of work per mutation.
        history_factory: Turns snapshot diffs into history entries.
        clock: Source of the mutation timestamp.
    """

    def __init__(
        self,
        uow_factory: Callable[[], UnitOfWork],
        history_factory: HistoryEntryFactory,
        clock: Callable[[], datetime] = _now_utc,
    ) -> None:
        self.uow_factory = uow_factory
        self.history_factory = history_factory
        self.clock = clock

    def run(
        self,
        accreditation_id: AccreditationId,
        expected_version: int,
        mutation: Mutation,
        *,
        actor: ActorId,
        zone_action: HistoryAction = HistoryAction.INFO_UPDATED,
        zone_note: Optional[str] = None,
        correlation_id: Optional[str] = None,
    ) -> MutationResult:
        """Apply ``mutation`` to the accreditation if its version still matches.

        Args:
            accreditation_id: Accreditation to mutate.
            expected_version: Version the caller read.
            mutation: Callback receiving the loaded aggregate, its last
                movement and the mutation timestamp; mutates the aggregate
                in place and returns the movements to append.
            actor: Agent performing the mutation.
            zone_action: History action recorded for a zone change.
            zone_note: Free text appended to the zone change description.
            correlation_id: Request correlation identifier for tracing.

        Returns:
            MutationResult with the committed accreditation, or the domain
            error that rejected the mutation.
        """
        with self.uow_factory() as uow:
            try:
                accreditation = self._load(uow, accreditation_id, expected_version)
                at = self.clock()
                before = accreditation.snapshot()
                movements = mutation(
                    accreditation, uow.movements.last(accreditation_id), at
                )
                entries = self.history_factory.changes(
                    accreditation_id,
                    before,
                    accreditation.snapshot(),
                    actor,
                    at,
                    zone_action=zone_action,
                    zone_note=zone_note,
                )
                if not movements and not entries:
                    logger.info(
                        "Accreditation %s unchanged, nothing written", accreditation_id
                    )
                    uow.rollback()
                    return MutationResult.success(accreditation, changed=False)

                accreditation.touch(at)
                uow.accreditations.update(accreditation, expected_version)
                stored = [uow.movements.append(movement) for movement in movements]
                for entry in entries:
                    uow.history.record(entry)
                uow.commit()
            except AccreditationDomainError as exc:
                uow.rollback()
                if correlation_id and exc.correlation_id is None:
                    exc.correlation_id = correlation_id
                logger.warning(
                    "Mutation of accreditation %s rejected: %s (correlation_id=%s)",
                    accreditation_id,
                    exc.message,
                    correlation_id,
                )
                return MutationResult.failure(exc)

        logger.info(
            "Accreditation %s committed at version %d by %s (%d movement(s), %d history entries)",
            accreditation_id,
            accreditation.version,
            actor,
            len(stored),
            len(entries),
        )
        return MutationResult.success(accreditation, tuple(stored))

    @staticmethod
    def _load(
        uow: UnitOfWork,
        accreditation_id: AccreditationId,
        expected_version: int,
    ) -> Accreditation:
        accreditation = uow.accreditations.find_by_id(accreditation_id)
        if accreditation is None:
            raise AccreditationNotFoundError(str(accreditation_id))
        if accreditation.version != expected_version:
            raise OptimisticLockError(
                str(accreditation_id),
                expected_version=expected_version,
                actual_version=accreditation.version,
            )
        return accreditation
