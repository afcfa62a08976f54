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

"""Shared fixtures for Accreditation Flow tests."""

import copy
import dataclasses

import pytest

from accreditation_flow.core.accreditations.entities import Accreditation, ZoneMovement
from accreditation_flow.core.accreditations.services import HistoryEntryFactory
from accreditation_flow.core.accreditations.status_machine import StatusMachine
from accreditation_flow.core.accreditations.value_objects import (
    ActorId,
    Status,
    Zone,
)
from accreditation_flow.core.accreditations.zone_graph import ZoneGraph
from accreditation_flow.orchestrator.accreditations.guard import ConcurrencyGuard
from accreditation_flow.tests.utils import MutableClock, T0, make_accreditation
from accreditation_flow.tests.utils.fakes import (
    FakeAccreditationIdGenerator,
    InMemoryStore,
    InMemoryUnitOfWork,
)


@pytest.fixture
def zone_graph():
    """Provide the default site topology."""
    return ZoneGraph()


@pytest.fixture
def status_machine(zone_graph):
    """Provide a status machine over the default topology."""
    return StatusMachine(zone_graph)


@pytest.fixture
def history_factory(zone_graph):
    """Provide a history entry factory."""
    return HistoryEntryFactory(zone_graph)


@pytest.fixture
def clock():
    """Provide a controllable clock starting at T0."""
    return MutableClock()


@pytest.fixture
def store():
    """Provide an empty in-memory store."""
    return InMemoryStore()


@pytest.fixture
def uow_factory(store):
    """Provide a unit of work factory over the in-memory store."""
    return lambda: InMemoryUnitOfWork(store)


@pytest.fixture
def guard(uow_factory, history_factory, clock):
    """Provide a concurrency guard over the in-memory store."""
    return ConcurrencyGuard(uow_factory, history_factory, clock=clock)


@pytest.fixture
def actor():
    """Provide the acting logistician."""
    return ActorId("logisticien-1")


@pytest.fixture
def seed(store):
    """Provide a helper committing an accreditation directly into the store."""

    def _seed(**overrides) -> Accreditation:
        accreditation = make_accreditation(**overrides)
        store.accreditations[str(accreditation.accreditation_id)] = copy.deepcopy(accreditation)
        return accreditation

    return _seed


@pytest.fixture
def seed_movement(store):
    """Provide a helper committing a movement directly into the log."""

    def _seed_movement(movement: ZoneMovement) -> ZoneMovement:
        stored = dataclasses.replace(movement, movement_id=store.next_movement_id())
        store.movements.append(stored)
        return stored

    return _seed_movement


@pytest.fixture
def waiting_in_la_bocca(seed, seed_movement):
    """Provide an ATTENTE accreditation assigned to LA_BOCCA, first entry logged."""
    accreditation = seed(status=Status.ATTENTE, current_zone=Zone.LA_BOCCA)
    seed_movement(ZoneMovement.entry(accreditation.accreditation_id, Zone.LA_BOCCA, None, T0))
    return accreditation


@pytest.fixture
def id_generator():
    """Provide a predictable accreditation id generator."""
    return FakeAccreditationIdGenerator()
