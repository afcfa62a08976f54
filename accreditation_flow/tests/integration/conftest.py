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

"""Pytest fixtures for integration tests over a SQLite database file."""

import logging

import pytest

from accreditation_flow.config import AuthConfig, DatabaseConfig, Settings, SiteConfig
from accreditation_flow.container import Container
from accreditation_flow.infra.db import (
    SqlAlchemyUnitOfWork,
    build_engine,
    build_session_factory,
    init_schema,
)

logger = logging.getLogger("integration_tests")


@pytest.fixture
def database_config(tmp_path):
    """Database settings pointing at a fresh file per test."""
    return DatabaseConfig(url=f"sqlite:///{tmp_path / 'accreditation_flow.db'}")


@pytest.fixture
def engine(database_config):
    """Engine with the schema created."""
    engine = build_engine(database_config)
    init_schema(engine)
    logger.info("Test database at %s", database_config.url)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    """Session factory bound to the test engine."""
    return build_session_factory(engine)


@pytest.fixture
def sql_uow_factory(session_factory):
    """Unit of work factory over the test database."""
    return lambda: SqlAlchemyUnitOfWork(session_factory)


@pytest.fixture
def sql_container(database_config, sql_uow_factory, zone_graph, clock):
    """Services over the test database, authentication disabled."""
    settings = Settings(
        database=database_config,
        site=SiteConfig(),
        auth=AuthConfig(enabled=False),
    )
    return Container.build(settings, sql_uow_factory, zone_graph=zone_graph, clock=clock)
