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

"""API tests for the bearer token permission gate and the zone catalogue."""

import time
from typing import Dict

import pytest
from fastapi import status
from fastapi.testclient import TestClient
from jose import jwt

from accreditation_flow.api.dependencies import READ_SCOPE, WRITE_SCOPE
from accreditation_flow.config import AuthConfig
from accreditation_flow.tests.utils import TEST_SECRET

ACCREDITATIONS_URL = "/api/v1/accreditations"
ZONES_URL = "/api/v1/zones"


@pytest.mark.integration
class TestPermissionGate:
    """Access control on every endpoint."""

    def test_missing_token_returns_401(self, test_client: TestClient):
        """Requests without a bearer token should be rejected."""
        response = test_client.get(ZONES_URL)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["detail"]["error"] == "unauthorized"
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_bad_signature_returns_401(self, test_client: TestClient):
        """Tokens signed with another key should be rejected."""
        token = jwt.encode({"sub": "intrus", "scope": READ_SCOPE}, "other-key", algorithm="HS256")
        response = test_client.get(ZONES_URL, headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_expired_token_returns_401(self, test_client: TestClient, make_token):
        """Expired tokens should be rejected."""
        token = make_token(exp=int(time.time()) - 60)
        response = test_client.get(ZONES_URL, headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_token_without_subject_returns_401(self, test_client: TestClient):
        """Tokens must name the acting user."""
        token = jwt.encode({"scope": READ_SCOPE}, TEST_SECRET, algorithm="HS256")
        response = test_client.get(ZONES_URL, headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_read_scope_allows_reads(self, test_client: TestClient, read_only_header: Dict[str, str]):
        """A read token should pass the gate on GET endpoints."""
        response = test_client.get(ZONES_URL, headers=read_only_header)
        assert response.status_code == status.HTTP_200_OK

    def test_read_scope_denies_writes(
        self,
        test_client: TestClient,
        read_only_header: Dict[str, str],
        create_request: Dict,
    ):
        """A read token should not create accreditations."""
        response = test_client.post(
            ACCREDITATIONS_URL, headers=read_only_header, json=create_request
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()["detail"]["error"] == "forbidden"

    def test_read_scope_allows_duplicate_check(
        self, test_client: TestClient, read_only_header: Dict[str, str]
    ):
        """The duplicate check is a read even though it is a POST."""
        response = test_client.post(
            f"{ACCREDITATIONS_URL}/check-duplicate",
            headers=read_only_header,
            json={"company": "Transports Riviera", "plate": "AB-123-CD"},
        )
        assert response.status_code == status.HTTP_200_OK

    def test_read_scope_denies_archive(
        self,
        test_client: TestClient,
        auth_header: Dict[str, str],
        read_only_header: Dict[str, str],
        create_request: Dict,
    ):
        """Archiving requires the write scope."""
        created = test_client.post(
            ACCREDITATIONS_URL, headers=auth_header, json=create_request
        ).json()
        response = test_client.post(
            f"{ACCREDITATIONS_URL}/{created['accreditation_id']}/archive",
            headers=read_only_header,
            json={"version": 1, "archive": True},
        )
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_write_scope_alone_denies_reads(self, test_client: TestClient, make_token):
        """Scopes are checked independently."""
        token = make_token(scopes=(WRITE_SCOPE,))
        response = test_client.get(ZONES_URL, headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.integration
class TestAudienceCheck:
    """Audience verification when an audience is configured."""

    @pytest.fixture
    def auth_config(self):
        """Authentication expecting the service audience."""
        return AuthConfig(enabled=True, secret=TEST_SECRET, audience="accreditation-flow")

    def test_wrong_audience_returns_401(self, test_client: TestClient, make_token):
        """Tokens for another service should be rejected."""
        token = make_token(aud="billing")
        response = test_client.get(ZONES_URL, headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_expected_audience_accepted(self, test_client: TestClient, make_token):
        """Tokens for this service should pass."""
        token = make_token(aud="accreditation-flow")
        response = test_client.get(ZONES_URL, headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == status.HTTP_200_OK


@pytest.mark.integration
class TestAuthenticationDisabled:
    """Gate behaviour when authentication is switched off."""

    @pytest.fixture
    def auth_config(self):
        """Authentication disabled."""
        return AuthConfig(enabled=False)

    def test_mutations_recorded_as_system(self, test_client: TestClient, create_request: Dict):
        """Without authentication the actor should be the system user."""
        created = test_client.post(ACCREDITATIONS_URL, json=create_request)
        assert created.status_code == status.HTTP_201_CREATED

        history = test_client.get(
            f"{ACCREDITATIONS_URL}/{created.json()['accreditation_id']}/history"
        ).json()
        assert history[0]["actor"] == "system"


@pytest.mark.integration
class TestZoneCatalogue:
    """Test suite for GET /api/v1/zones."""

    def test_lists_active_zones(self, test_client: TestClient, auth_header: Dict[str, str]):
        """Every active zone should be listed with its transfer targets."""
        response = test_client.get(ZONES_URL, headers=auth_header)

        assert response.status_code == status.HTTP_200_OK
        zones = {item["zone"]: item for item in response.json()}
        assert list(zones) == ["LA_BOCCA", "PALAIS_DES_FESTIVALS", "PANTIERO", "MACE"]
        assert zones["PALAIS_DES_FESTIVALS"]["is_final_destination"] is True
        assert zones["PALAIS_DES_FESTIVALS"]["transfer_targets"] == []
        assert zones["LA_BOCCA"]["transfer_targets"] == [
            "PALAIS_DES_FESTIVALS",
            "PANTIERO",
            "MACE",
        ]
        assert zones["MACE"]["label"] == "Macé"
