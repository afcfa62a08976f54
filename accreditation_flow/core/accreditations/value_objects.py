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

"""Value objects for Accreditation domain.

All value objects are immutable and defined by their values, not identity.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar


@dataclass(frozen=True)
class AccreditationId:
    """UUID v7 identifier for an accreditation.

    Attributes:
        value: String representation of UUID v7.

    Raises:
        ValueError: If value does not match UUID v7 pattern or exceeds length.
    """

    value: str

    UUID_V7_PATTERN: ClassVar[str] = (
        r'^[0-9a-f]{8}-[0-9a-f]{4}-7[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$'
    )
    MAX_LENGTH: ClassVar[int] = 36

    def __post_init__(self) -> None:
        """Validate UUID v7 format and length."""
        if len(self.value) > self.MAX_LENGTH:
            raise ValueError(
                f"AccreditationId length cannot exceed {self.MAX_LENGTH} characters, "
                f"got {len(self.value)}"
            )
        if not re.match(self.UUID_V7_PATTERN, self.value.lower()):
            raise ValueError(f"Invalid UUID v7 format: {self.value}")

    def __str__(self) -> str:
        """Return string representation."""
        return self.value


@dataclass(frozen=True)
class ActorId:
    """Identity of the agent performing a mutation.

    Attributes:
        value: User identifier, or ``system`` for unattended changes.

    Raises:
        ValueError: If value is empty or exceeds length.
    """

    value: str

    MAX_LENGTH: ClassVar[int] = 128
    SYSTEM: ClassVar[str] = "system"

    def __post_init__(self) -> None:
        """Validate actor is not empty and within length limit."""
        if len(self.value) > self.MAX_LENGTH:
            raise ValueError(
                f"ActorId length cannot exceed {self.MAX_LENGTH} characters, "
                f"got {len(self.value)}"
            )
        if not self.value or not self.value.strip():
            raise ValueError("Actor ID cannot be empty")

    @classmethod
    def system(cls) -> "ActorId":
        """Return the actor used when no user is attached to the request."""
        return cls(cls.SYSTEM)

    def __str__(self) -> str:
        """Return string representation."""
        return self.value


class Status(str, Enum):
    """Accreditation lifecycle statuses.

    REFUS and ABSENT are absorbing: once reached, nothing moves the
    accreditation again.
    """

    NOUVEAU = "NOUVEAU"
    ATTENTE = "ATTENTE"
    ENTREE = "ENTREE"
    SORTIE = "SORTIE"
    REFUS = "REFUS"
    ABSENT = "ABSENT"

    def is_terminal(self) -> bool:
        """Check if status is absorbing.

        Returns:
            True if status is REFUS or ABSENT.
        """
        return self in {Status.REFUS, Status.ABSENT}


class Zone(str, Enum):
    """Closed set of site zones a vehicle can occupy."""

    LA_BOCCA = "LA_BOCCA"
    PALAIS_DES_FESTIVALS = "PALAIS_DES_FESTIVALS"
    PANTIERO = "PANTIERO"
    MACE = "MACE"


class MovementAction(str, Enum):
    """Kind of zone movement recorded in the movement log."""

    ENTRY = "ENTRY"
    EXIT = "EXIT"


class HistoryAction(str, Enum):
    """Kind of audit record written for an accepted mutation."""

    CREATED = "CREATED"
    STATUS_CHANGED = "STATUS_CHANGED"
    INFO_UPDATED = "INFO_UPDATED"
    ZONE_CHANGED = "ZONE_CHANGED"
    ZONE_TRANSFER = "ZONE_TRANSFER"
    ARCHIVED = "ARCHIVED"


class VehicleType(str, Enum):
    """Vehicle body types accepted on site."""

    PORTEUR = "PORTEUR"
    PORTEUR_ARTICULE = "PORTEUR_ARTICULE"
    SEMI_REMORQUE = "SEMI_REMORQUE"
