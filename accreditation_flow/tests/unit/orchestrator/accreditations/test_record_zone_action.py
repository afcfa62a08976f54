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

"""Unit tests for RecordZoneActionUseCase."""

import pytest

from accreditation_flow.core.accreditations.entities import ZoneMovement
from accreditation_flow.core.accreditations.exceptions import (
    InvalidStateTransitionError,
    InvalidZoneError,
)
from accreditation_flow.core.accreditations.value_objects import (
    AccreditationId,
    HistoryAction,
    MovementAction,
    Status,
    Zone,
)
from accreditation_flow.orchestrator.accreditations.commands import RecordZoneActionCommand
from accreditation_flow.orchestrator.accreditations.use_cases import RecordZoneActionUseCase
from accreditation_flow.tests.utils import ACCREDITATION_ID, T0, at

ACC = AccreditationId(ACCREDITATION_ID)


@pytest.fixture
def use_case(guard, status_machine):
    """Provide the use case over the in-memory store."""
    return RecordZoneActionUseCase(guard, status_machine)


@pytest.fixture
def scan(use_case, actor):
    """Provide a helper recording a gate scan."""

    def _scan(action, zone, version=1):
        return use_case.execute(RecordZoneActionCommand(
            accreditation_id=ACC,
            expected_version=version,
            actor=actor,
            action=action,
            zone=zone,
        ))

    return _scan


@pytest.fixture
def left_la_bocca(seed, seed_movement):
    """Provide a SORTIE accreditation that left LA_BOCCA after 30 minutes."""
    accreditation = seed(
        status=Status.SORTIE, current_zone=Zone.LA_BOCCA, entry_at=T0, exit_at=at(30)
    )
    seed_movement(ZoneMovement.entry(ACC, Zone.LA_BOCCA, None, T0))
    seed_movement(ZoneMovement.exit(ACC, Zone.LA_BOCCA, at(30)))
    return accreditation


@pytest.mark.unit
class TestEntryScan:
    """ENTRY scans."""

    def test_arrival_at_assigned_zone(self, scan, waiting_in_la_bocca, store):
        """An arrival at the assigned gate should not duplicate the entry."""
        result = scan(MovementAction.ENTRY, "LA_BOCCA")

        assert result.accreditation.status == Status.ENTREE
        assert len(store.movements) == 1
        (entry,) = store.history
        assert entry.action == HistoryAction.STATUS_CHANGED

    def test_arrival_at_other_gate(self, scan, waiting_in_la_bocca, store):
        """An arrival at another gate should be logged as a zone change."""
        result = scan(MovementAction.ENTRY, "PANTIERO")

        assert [movement.action for movement in result.movements] == [
            MovementAction.EXIT,
            MovementAction.ENTRY,
        ]
        zone_entry = next(entry for entry in store.history if entry.field == "currentZone")
        assert zone_entry.action == HistoryAction.ZONE_CHANGED
        assert zone_entry.description == "Entrée en zone Pantiero"

    def test_re_entry_after_exit(self, scan, left_la_bocca, store, clock):
        """An ENTRY scan on an exited vehicle should move it on."""
        clock.now = at(50)
        result = scan(MovementAction.ENTRY, "PALAIS_DES_FESTIVALS")

        assert result.accreditation.status == Status.ENTREE
        assert result.accreditation.current_zone == Zone.PALAIS_DES_FESTIVALS
        assert result.accreditation.entry_at == T0
        (movement,) = result.movements
        assert movement.from_zone == Zone.LA_BOCCA
        assert movement.timestamp == at(50)

    def test_entry_on_new_request_rejected(self, scan, seed, store):
        """A NOUVEAU request cannot be scanned in."""
        seed()
        result = scan(MovementAction.ENTRY, "LA_BOCCA")
        assert isinstance(result.error, InvalidStateTransitionError)
        assert store.movements == []


@pytest.mark.unit
class TestExitScan:
    """EXIT scans."""

    def test_exit_closes_slot(self, scan, waiting_in_la_bocca, store, clock):
        """An EXIT scan should append the matching EXIT."""
        scan(MovementAction.ENTRY, "LA_BOCCA")
        clock.advance(40)
        result = scan(MovementAction.EXIT, "LA_BOCCA", version=2)

        assert result.accreditation.status == Status.SORTIE
        assert result.accreditation.exit_at == at(40)
        (movement,) = result.movements
        assert movement.action == MovementAction.EXIT
        assert movement.to_zone == Zone.LA_BOCCA

    def test_exit_from_wrong_zone(self, scan, waiting_in_la_bocca, store):
        """An EXIT scan at another gate should be rejected."""
        scan(MovementAction.ENTRY, "LA_BOCCA")
        result = scan(MovementAction.EXIT, "MACE", version=2)

        assert isinstance(result.error, InvalidZoneError)
        assert store.accreditations[ACCREDITATION_ID].status == Status.ENTREE

    def test_exit_before_arrival(self, scan, waiting_in_la_bocca):
        """A waiting vehicle cannot leave."""
        result = scan(MovementAction.EXIT, "LA_BOCCA")
        assert isinstance(result.error, InvalidStateTransitionError)
        assert result.error.to_state == "SORTIE"
