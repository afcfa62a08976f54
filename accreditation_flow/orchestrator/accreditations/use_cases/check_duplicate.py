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


"""CheckDuplicate use case implementation."""

import logging
import re
from typing import Callable, List, Optional

from accreditation_flow.core.accreditations.entities import Accreditation
from accreditation_flow.core.accreditations.repositories import UnitOfWork

from ..dtos import DuplicateResponse

logger = logging.getLogger(__name__)

MAX_DUPLICATES = 10

_PLATE_NOISE = re.compile(r"[^a-z0-9]")


def normalize_plate(plate: Optional[str]) -> str:
    """Lower-case a plate and strip everything but letters and digits."""
    return _PLATE_NOISE.sub("", (plate or "").strip().lower())


class CheckDuplicateUseCase:
    """Use case finding active accreditations a new request may duplicate.

    A candidate matches when its company equals the requested one after
    trimming and lower-casing, and one of its vehicles carries the same
    normalized plate. A trailer plate, when given, must match as well.
    Archived accreditations are never reported.
    """

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def execute(
        self,
        company: str,
        plate: str,
        trailer_plate: Optional[str] = None,
    ) -> List[DuplicateResponse]:
        """Return at most MAX_DUPLICATES matching accreditations, newest first.

        Args:
            company: Company of the new request.
            plate: Plate of one of its vehicles.
            trailer_plate: Trailer plate of that vehicle, if any.

        Returns:
            Matching accreditations; empty when company or plate is blank.
        """
        wanted_plate = normalize_plate(plate)
        if not company.strip() or not wanted_plate:
            return []
        wanted_trailer = normalize_plate(trailer_plate)

        with self._uow_factory() as uow:
            candidates = uow.accreditations.find_active_by_company(company)

        duplicates = [
            DuplicateResponse.from_entity(accreditation)
            for accreditation in candidates
            if self._matches(accreditation, wanted_plate, wanted_trailer)
        ][:MAX_DUPLICATES]
        if duplicates:
            logger.info(
                "Possible duplicate of %s found for company %r",
                duplicates[0].accreditation_id,
                company.strip(),
            )
        return duplicates

    @staticmethod
    def _matches(accreditation: Accreditation, plate: str, trailer_plate: str) -> bool:
        plates = {normalize_plate(vehicle.plate) for vehicle in accreditation.vehicles}
        if plate not in plates:
            return False
        if not trailer_plate:
            return True
        return any(
            normalize_plate(vehicle.trailer_plate) == trailer_plate
            for vehicle in accreditation.vehicles
        )
