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

"""Domain exceptions for Accreditation aggregate."""

from typing import List, Optional


class AccreditationDomainError(Exception):
    """Base exception for all accreditation domain errors."""

    def __init__(self, message: str, correlation_id: Optional[str] = None) -> None:
        """Initialize domain error.

        Args:
            message: Human-readable error description.
            correlation_id: Optional correlation ID for tracing.
        """
        super().__init__(message)
        self.message = message
        self.correlation_id = correlation_id


class AccreditationNotFoundError(AccreditationDomainError):
    """Accreditation does not exist in the system."""

    def __init__(
        self,
        accreditation_id: str,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize accreditation not found error.

        Args:
            accreditation_id: The accreditation ID that was not found.
            correlation_id: Optional correlation ID for tracing.
        """
        super().__init__(
            f"Accreditation not found: {accreditation_id}",
            correlation_id=correlation_id
        )
        self.accreditation_id = accreditation_id


class OptimisticLockError(AccreditationDomainError):
    """Version conflict detected during update.

    The caller must reload the accreditation before trying again; the
    correct next transition may differ from the one originally intended.
    """

    def __init__(
        self,
        accreditation_id: str,
        expected_version: int,
        actual_version: Optional[int] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize optimistic lock error.

        Args:
            accreditation_id: Identifier of the accreditation.
            expected_version: Version the caller based its change on.
            actual_version: Current version in the store, when known.
            correlation_id: Optional correlation ID for tracing.
        """
        found = "unknown" if actual_version is None else actual_version
        super().__init__(
            f"Version conflict for accreditation {accreditation_id}: "
            f"expected {expected_version}, found {found}. "
            f"Reload the accreditation before retrying",
            correlation_id=correlation_id
        )
        self.accreditation_id = accreditation_id
        self.expected_version = expected_version
        self.actual_version = actual_version


class InvalidStateTransitionError(AccreditationDomainError):
    """Requested status change is not reachable from the current status."""

    def __init__(
        self,
        accreditation_id: str,
        from_state: str,
        to_state: str,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize invalid state transition error.

        Args:
            accreditation_id: Identifier of the accreditation.
            from_state: Current status.
            to_state: Attempted target status.
            correlation_id: Optional correlation ID for tracing.
        """
        super().__init__(
            f"Invalid accreditation status transition for {accreditation_id}: "
            f"{from_state} -> {to_state}",
            correlation_id=correlation_id
        )
        self.accreditation_id = accreditation_id
        self.from_state = from_state
        self.to_state = to_state


class TerminalStateViolationError(InvalidStateTransitionError):
    """Attempted to move an accreditation out of an absorbing status."""

    def __init__(
        self,
        accreditation_id: str,
        state: str,
        to_state: str,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize terminal state violation error.

        Args:
            accreditation_id: Identifier of the accreditation.
            state: Current terminal status.
            to_state: Attempted target status.
            correlation_id: Optional correlation ID for tracing.
        """
        AccreditationDomainError.__init__(
            self,
            f"Cannot modify accreditation {accreditation_id} "
            f"in terminal state: {state}",
            correlation_id=correlation_id
        )
        self.accreditation_id = accreditation_id
        self.from_state = state
        self.to_state = to_state
        self.state = state


class InvalidZoneError(AccreditationDomainError):
    """Zone is unknown, missing, or not a legal target from the current zone."""

    def __init__(
        self,
        zone: Optional[str],
        reason: str,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize invalid zone error.

        Args:
            zone: The rejected zone value (None when a zone was required).
            reason: Why the zone was rejected.
            correlation_id: Optional correlation ID for tracing.
        """
        super().__init__(
            f"Invalid zone {zone}: {reason}",
            correlation_id=correlation_id
        )
        self.zone = zone
        self.reason = reason


class StructuralViolation(AccreditationDomainError):
    """Movement log breaks the ENTRY/EXIT alternation.

    Never raised on the read path: the time slot aggregator collects these
    as warnings and degrades instead of failing the whole read.
    """

    def __init__(
        self,
        accreditation_id: Optional[str],
        detail: str,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize structural violation.

        Args:
            accreditation_id: Owner of the inconsistent log, when known.
            detail: Description of the inconsistency.
            correlation_id: Optional correlation ID for tracing.
        """
        super().__init__(
            f"Movement log inconsistency for {accreditation_id or 'unknown'}: {detail}",
            correlation_id=correlation_id
        )
        self.accreditation_id = accreditation_id
        self.detail = detail


class InvalidAccreditationError(AccreditationDomainError):
    """Accreditation request is incomplete or malformed."""

    def __init__(
        self,
        reason: str,
        fields: Optional[List[str]] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize invalid accreditation error.

        Args:
            reason: Why the request was rejected.
            fields: Offending field names, when known.
            correlation_id: Optional correlation ID for tracing.
        """
        super().__init__(
            f"Invalid accreditation: {reason}",
            correlation_id=correlation_id
        )
        self.reason = reason
        self.fields = list(fields or [])
