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

"""CreateAccreditation use case implementation."""

import logging
from datetime import datetime, timezone
from typing import Callable, List

from accreditation_flow.core.accreditations.entities import Accreditation
from accreditation_flow.core.accreditations.exceptions import (
    AccreditationDomainError,
    InvalidAccreditationError,
)
from accreditation_flow.core.accreditations.repositories import (
    AccreditationIdGenerator,
    UnitOfWork,
)
from accreditation_flow.core.accreditations.services import HistoryEntryFactory
from accreditation_flow.core.accreditations.value_objects import Status

from ..commands import CreateAccreditationCommand
from ..dtos import MutationResult

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("company", "stand", "unloading", "event")
INITIAL_STATUSES = (Status.NOUVEAU, Status.ATTENTE)


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


class CreateAccreditationUseCase:
    """Use case for creating a new accreditation.

    This use case orchestrates creation with the following guarantees:
    - Validation: required fields and at least one complete vehicle
    - Atomicity: accreditation, vehicles and CREATED history entry commit together
    - Initial state: NOUVEAU or ATTENTE, no zone, version 1

    Attributes:
        uow_factory: Creates the unit of work for the insert.
        id_generator: Accreditation identifier generator.
        history_factory: Builds the CREATED history entry.
    """

    def __init__(
        self,
        uow_factory: Callable[[], UnitOfWork],
        id_generator: AccreditationIdGenerator,
        history_factory: HistoryEntryFactory,
        clock: Callable[[], datetime] = _now_utc,
    ) -> None:
        """Initialize use case with its dependencies.

        Args:
            uow_factory: Unit of work factory.
            id_generator: Accreditation identifier generator to use.
            history_factory: History entry factory.
            clock: Source of the creation timestamp.
        """
        self._uow_factory = uow_factory
        self._id_generator = id_generator
        self._history_factory = history_factory
        self._clock = clock

    def execute(self, command: CreateAccreditationCommand) -> MutationResult:
        """Execute accreditation creation.

        Args:
            command: CreateAccreditation command.

        Returns:
            MutationResult with the created accreditation, or an
            InvalidAccreditationError describing what is missing.
        """
        try:
            self._validate(command)
            accreditation = self._build(command)
        except AccreditationDomainError as exc:
            logger.warning("Accreditation request rejected: %s", exc.message)
            return MutationResult.failure(exc)

        with self._uow_factory() as uow:
            uow.accreditations.add(accreditation)
            uow.history.record(self._history_factory.created(
                accreditation.accreditation_id,
                command.actor,
                accreditation.created_at,
            ))
            uow.commit()

        logger.info(
            "Accreditation %s created in %s by %s",
            accreditation.accreditation_id,
            accreditation.status.value,
            command.actor,
        )
        return MutationResult.success(accreditation)

    def _validate(self, command: CreateAccreditationCommand) -> None:
        """Raise InvalidAccreditationError on an incomplete request."""
        if command.status not in INITIAL_STATUSES:
            raise InvalidAccreditationError(
                f"initial status must be NOUVEAU or ATTENTE, got {command.status.value}",
                fields=["status"],
                correlation_id=command.correlation_id,
            )

        missing: List[str] = [
            name for name in REQUIRED_FIELDS
            if not (getattr(command, name) or "").strip()
        ]
        if not command.vehicles:
            missing.append("vehicles")
        for index, vehicle in enumerate(command.vehicles):
            missing.extend(
                f"vehicles[{index}].{name}" for name in vehicle.missing_fields()
            )
        if missing:
            raise InvalidAccreditationError(
                f"missing required fields: {', '.join(missing)}",
                fields=missing,
                correlation_id=command.correlation_id,
            )

    def _build(self, command: CreateAccreditationCommand) -> Accreditation:
        """Build the Accreditation aggregate for a create request."""
        now = self._clock()
        return Accreditation(
            accreditation_id=self._id_generator.generate(),
            company=command.company.strip(),
            stand=command.stand.strip(),
            unloading=command.unloading.strip(),
            event=command.event.strip(),
            status=command.status,
            message=command.message,
            email=command.email,
            consent=command.consent,
            vehicles=list(command.vehicles),
            created_at=now,
            updated_at=now,
        )
