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

"""Shared fixtures for API tests.

The application runs over the in-memory store with a controllable clock;
bearer tokens are signed with a test secret.
"""

from typing import Callable, Dict

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from accreditation_flow.api.dependencies import READ_SCOPE, WRITE_SCOPE
from accreditation_flow.config import AuthConfig, DatabaseConfig, Settings, SiteConfig
from accreditation_flow.container import Container
from accreditation_flow.main import create_app
from accreditation_flow.tests.utils import TEST_SECRET


@pytest.fixture
def auth_config():
    """Authentication enabled with the test secret."""
    return AuthConfig(enabled=True, secret=TEST_SECRET)


@pytest.fixture
def settings(auth_config):
    """Application settings for API tests."""
    return Settings(database=DatabaseConfig(), site=SiteConfig(), auth=auth_config)


@pytest.fixture
def container(settings, uow_factory, zone_graph, clock):
    """Services over the in-memory store."""
    return Container.build(settings, uow_factory, zone_graph=zone_graph, clock=clock)


@pytest.fixture
def test_client(container) -> TestClient:
    """Client for an application wired to the in-memory container."""
    return TestClient(create_app(container))


@pytest.fixture
def make_token() -> Callable[..., str]:
    """Sign tokens with the test secret."""

    def _make_token(subject: str = "logisticien-1", scopes=(READ_SCOPE, WRITE_SCOPE), **claims) -> str:
        payload = {"sub": subject, "scope": " ".join(scopes)}
        payload.update(claims)
        return jwt.encode(payload, TEST_SECRET, algorithm="HS256")

    return _make_token


@pytest.fixture
def auth_header(make_token) -> Dict[str, str]:
    """Bearer header granting read and write access."""
    return {"Authorization": f"Bearer {make_token()}"}


@pytest.fixture
def read_only_header(make_token) -> Dict[str, str]:
    """Bearer header granting read access only."""
    return {"Authorization": f"Bearer {make_token(scopes=(READ_SCOPE,))}"}


@pytest.fixture
def create_request() -> Dict:
    """Complete public request body."""
    return {
        "company": "Transports Riviera",
        "stand": "B12",
        "unloading": "Quai arrière",
        "event": "Festival",
        "email": "contact@riviera.fr",
        "vehicles": [
            {
                "plate": "AB-123-CD",
                "size": "Porteur",
                "phone_code": "+33",
                "phone_number": "612345678",
                "date": "2026-05-14",
                "time": "08:00",
                "city": "Nice",
                "unloading": ["lat"],
                "vehicle_type": "PORTEUR",
            }
        ],
    }
