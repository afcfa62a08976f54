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

"""Outcome of a mutating accreditation operation."""

from dataclasses import dataclass, field
from typing import Optional, Tuple

from accreditation_flow.core.accreditations.entities import Accreditation, ZoneMovement
from accreditation_flow.core.accreditations.exceptions import AccreditationDomainError


@dataclass(frozen=True)
class MutationResult:
    """Success with the updated record, or failure with the domain error.

    Domain errors never cross the transaction boundary as exceptions;
    callers branch on ``ok`` instead.

    Attributes:
        accreditation: Accreditation as committed (success only).
        movements: Movements appended by the mutation, with store identifiers.
        error: Domain error that rejected the mutation (failure only).
        changed: False when the request matched the stored state and
            nothing was written.
    """

    accreditation: Optional[Accreditation] = None
    movements: Tuple[ZoneMovement, ...] = field(default_factory=tuple)
    error: Optional[AccreditationDomainError] = None
    changed: bool = True

    @classmethod
    def success(
        cls,
        accreditation: Accreditation,
        movements: Tuple[ZoneMovement, ...] = (),
        changed: bool = True,
    ) -> "MutationResult":
        """Build a successful result."""
        return cls(accreditation=accreditation, movements=tuple(movements), changed=changed)

    @classmethod
    def failure(cls, error: AccreditationDomainError) -> "MutationResult":
        """Build a failed result."""
        return cls(error=error, changed=False)

    @property
    def ok(self) -> bool:
        """True if the mutation was accepted."""
        return self.error is None

    def unwrap(self) -> Accreditation:
        """Return the accreditation or raise the wrapped error.

        Raises:
            AccreditationDomainError: The error carried by a failed result.
        """
        if self.error is not None:
            raise self.error
        return self.accreditation
