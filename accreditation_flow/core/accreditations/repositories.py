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

"""Repository port interfaces (Protocols) for Accreditation domain.

These define the contracts that infrastructure implementations must satisfy.
Using Protocol instead of ABC allows for structural subtyping (duck typing).
"""

from datetime import datetime
from typing import List, Optional, Protocol

from .entities import Accreditation, HistoryEntry, ZoneMovement
from .value_objects import AccreditationId


class AccreditationIdGenerator(Protocol):
    """Generator port for creating Accreditation identifiers."""

    def generate(self) -> AccreditationId:
        """Generate a new Accreditation identifier.

        Returns:
            A new, unique AccreditationId.
        """
        ...


class AccreditationRepository(Protocol):
    """Repository port for Accreditation aggregate persistence."""

    def add(self, accreditation: Accreditation) -> None:
        """Persist a new accreditation with its vehicles.

        Args:
            accreditation: Accreditation entity to persist.
        """
        ...

    def find_by_id(self, accreditation_id: AccreditationId) -> Optional[Accreditation]:
        """Retrieve an accreditation by its identifier.

        Args:
            accreditation_id: Unique accreditation identifier.

        Returns:
            Accreditation entity if found, None otherwise.
        """
        ...

    def find_all(self, archived: bool = False) -> List[Accreditation]:
        """Retrieve accreditations by archive flag, newest first.

        Args:
            archived: Return archived accreditations instead of active ones.

        Returns:
            Accreditations with their vehicles (may be empty).
        """
        ...

    def find_active_by_company(self, company: str) -> List[Accreditation]:
        """Retrieve non-archived accreditations of a company.

        Args:
            company: Company name, trimmed and lower-cased; stored names
                are compared the same way.

        Returns:
            Matching accreditations, newest first (may be empty).
        """
        ...

    def update(self, accreditation: Accreditation, expected_version: int) -> None:
        """Write an accreditation whose version was bumped from ``expected_version``.

        The write must be conditioned on the stored version still being
        ``expected_version``, so a concurrent commit is never overwritten.

        Args:
            accreditation: Accreditation entity carrying the new version.
            expected_version: Version read at the start of the transaction.

        Raises:
            OptimisticLockError: If no row matched the version predicate.
        """
        ...


class MovementLog(Protocol):
    """Append-only movement log port.

    No update or delete operation exists.
    """

    def append(self, movement: ZoneMovement) -> ZoneMovement:
        """Append a movement inside the current transaction.

        Args:
            movement: Movement to append.

        Returns:
            The movement with its store-assigned identifier.
        """
        ...

    def read_all(self, accreditation_id: AccreditationId) -> List[ZoneMovement]:
        """Retrieve every movement of an accreditation, oldest first.

        Args:
            accreditation_id: Owning accreditation.

        Returns:
            Movements ordered by timestamp then identifier (may be empty).
        """
        ...

    def last(self, accreditation_id: AccreditationId) -> Optional[ZoneMovement]:
        """Retrieve the most recent movement of an accreditation.

        Args:
            accreditation_id: Owning accreditation.

        Returns:
            Most recent movement, None when the log is empty.
        """
        ...


class HistoryRecorder(Protocol):
    """Audit sink port; write-only from the mutation path."""

    def record(self, entry: HistoryEntry) -> None:
        """Persist a history entry inside the current transaction.

        Args:
            entry: History entry to persist.
        """
        ...

    def find_by_accreditation(self, accreditation_id: AccreditationId) -> List[HistoryEntry]:
        """Retrieve history entries of an accreditation, newest first.

        Args:
            accreditation_id: Owning accreditation.

        Returns:
            History entries (may be empty).
        """
        ...

    def find_since(self, since: datetime, limit: int) -> List[HistoryEntry]:
        """Retrieve entries of every accreditation recorded after ``since``.

        Args:
            since: Exclusive lower bound on the entry timestamp.
            limit: Maximum number of entries returned.

        Returns:
            The oldest ``limit`` matching entries, oldest first.
        """
        ...


class UnitOfWork(Protocol):
    """Transaction boundary shared by the three repositories.

    Leaving the context without ``commit`` discards every staged write.
    """

    accreditations: AccreditationRepository
    movements: MovementLog
    history: HistoryRecorder

    def __enter__(self) -> "UnitOfWork":
        ...

    def __exit__(self, exc_type, exc, traceback) -> None:
        ...

    def commit(self) -> None:
        """Commit staged writes atomically."""
        ...

    def rollback(self) -> None:
        """Discard staged writes."""
        ...
