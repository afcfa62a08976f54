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

"""Read-side use cases: accreditations, movements and history."""

from typing import Callable, List

from accreditation_flow.core.accreditations.entities import Accreditation
from accreditation_flow.core.accreditations.exceptions import AccreditationNotFoundError
from accreditation_flow.core.accreditations.repositories import UnitOfWork
from accreditation_flow.core.accreditations.value_objects import AccreditationId

from ..dtos import AccreditationResponse, HistoryEntryResponse, MovementResponse


def _require(uow: UnitOfWork, accreditation_id: AccreditationId) -> Accreditation:
    accreditation = uow.accreditations.find_by_id(accreditation_id)
    if accreditation is None:
        raise AccreditationNotFoundError(str(accreditation_id))
    return accreditation


class GetAccreditationUseCase:
    """Use case returning one accreditation."""

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def execute(self, accreditation_id: AccreditationId) -> AccreditationResponse:
        """Return the accreditation.

        Raises:
            AccreditationNotFoundError: If the accreditation does not exist.
        """
        with self._uow_factory() as uow:
            return AccreditationResponse.from_entity(_require(uow, accreditation_id))


class ListMovementsUseCase:
    """Use case returning the movement log of an accreditation, oldest first."""

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def execute(self, accreditation_id: AccreditationId) -> List[MovementResponse]:
        """Return the movements.

        Raises:
            AccreditationNotFoundError: If the accreditation does not exist.
        """
        with self._uow_factory() as uow:
            _require(uow, accreditation_id)
            return [
                MovementResponse.from_entity(movement)
                for movement in uow.movements.read_all(accreditation_id)
            ]


class GetHistoryUseCase:
    """Use case returning the history of an accreditation, newest first."""

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def execute(self, accreditation_id: AccreditationId) -> List[HistoryEntryResponse]:
        """Return the history entries.

        Raises:
            AccreditationNotFoundError: If the accreditation does not exist.
        """
        with self._uow_factory() as uow:
            _require(uow, accreditation_id)
            return [
                HistoryEntryResponse.from_entity(entry)
                for entry in uow.history.find_by_accreditation(accreditation_id)
            ]


class ListAccreditationsUseCase:
    """Use case listing accreditations, newest first."""

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def execute(self, archived: bool = False) -> List[AccreditationResponse]:
        """Return active accreditations, or archived ones when ``archived``."""
        with self._uow_factory() as uow:
            return [
                AccreditationResponse.from_entity(accreditation)
                for accreditation in uow.accreditations.find_all(archived=archived)
            ]
