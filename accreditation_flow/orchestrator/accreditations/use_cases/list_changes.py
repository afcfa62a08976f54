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


"""ListChanges use case: history entries recorded since a given instant."""

from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Optional

from accreditation_flow.core.accreditations.entities import Accreditation
from accreditation_flow.core.accreditations.repositories import UnitOfWork
from accreditation_flow.core.accreditations.value_objects import Zone

from ..dtos import ChangeEventResponse, ChangesResponse

DEFAULT_WINDOW = timedelta(seconds=30)
MAX_EVENTS = 50


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


class ListChangesUseCase:
    """Use case feeding polling clients with recent history entries.

    Attributes:
        uow_factory: Creates the unit of work for the read.
        clock: Source of the reading time.
    """

    def __init__(
        self,
        uow_factory: Callable[[], UnitOfWork],
        clock: Callable[[], datetime] = _now_utc,
    ) -> None:
        self._uow_factory = uow_factory
        self._clock = clock

    def execute(
        self,
        since: Optional[datetime] = None,
        zone: Optional[Zone] = None,
    ) -> ChangesResponse:
        """Return entries recorded strictly after ``since``, oldest first.

        At most MAX_EVENTS entries are read; the zone filter applies to
        that page, so a filtered page may be shorter.

        Args:
            since: Lower bound; defaults to DEFAULT_WINDOW before now.
                Naive values are read as UTC.
            zone: Keep only accreditations currently in this zone.

        Returns:
            ChangesResponse with the events and the server reading time.
        """
        now = self._clock()
        if since is None:
            since = now - DEFAULT_WINDOW
        elif since.tzinfo is None:
            since = since.replace(tzinfo=timezone.utc)

        events = []
        owners: Dict[str, Optional[Accreditation]] = {}
        with self._uow_factory() as uow:
            for entry in uow.history.find_since(since.astimezone(timezone.utc), MAX_EVENTS):
                key = str(entry.accreditation_id)
                if key not in owners:
                    owners[key] = uow.accreditations.find_by_id(entry.accreditation_id)
                accreditation = owners[key]
                if accreditation is None:
                    continue
                if zone is not None and accreditation.current_zone != zone:
                    continue
                events.append(ChangeEventResponse.from_entities(entry, accreditation))

        return ChangesResponse(events=events, server_time=now.isoformat())
