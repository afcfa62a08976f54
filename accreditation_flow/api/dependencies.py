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

"""FastAPI dependencies: service container, permission gate, correlation id."""

import logging
from dataclasses import dataclass
from typing import Callable, FrozenSet, Optional

from fastapi import Depends, Header, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from accreditation_flow.config import AuthConfig
from accreditation_flow.container import Container
from accreditation_flow.core.accreditations.value_objects import ActorId

logger = logging.getLogger(__name__)

READ_SCOPE = "accreditations:read"
WRITE_SCOPE = "accreditations:write"

_bearer = HTTPBearer(auto_error=False)


class TokenVerificationError(Exception):
    """Exception raised when a bearer token cannot be trusted."""


@dataclass(frozen=True)
class Principal:
    """Caller identity extracted from a verified token."""

    subject: str
    scopes: FrozenSet[str]

    def has_scope(self, scope: str) -> bool:
        """Check if the token grants ``scope``."""
        return scope in self.scopes


class TokenVerifier:
    """Verifies bearer tokens issued by the site's identity provider."""

    def __init__(self, config: AuthConfig) -> None:
        self._config = config

    def verify(self, token: str) -> Principal:
        """Decode and validate a token.

        Args:
            token: Encoded JWT.

        Returns:
            Principal built from the ``sub`` and ``scope`` claims.

        Raises:
            TokenVerificationError: If the signature, expiry, audience or
                issuer is invalid, or the subject is missing.
        """
        options = {"verify_aud": self._config.audience is not None}
        try:
            claims = jwt.decode(
                token,
                self._config.secret,
                algorithms=[self._config.algorithm],
                audience=self._config.audience,
                issuer=self._config.issuer,
                options=options,
            )
        except JWTError as exc:
            raise TokenVerificationError(str(exc)) from exc

        subject = claims.get("sub")
        if not subject:
            raise TokenVerificationError("Token has no subject")
        scopes = frozenset((claims.get("scope") or "").split())
        return Principal(subject=str(subject), scopes=scopes)


def get_container(request: Request) -> Container:
    """Return the container attached to the application at startup."""
    return request.app.state.container


def get_correlation_id(
    x_correlation_id: Optional[str] = Header(default=None),
    container: Container = Depends(get_container),
) -> str:
    """Use the caller's X-Correlation-ID, or generate one."""
    return x_correlation_id or container.correlation_ids.generate()


def _error(status_code: int, error: str, message: str) -> HTTPException:
    headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
    return HTTPException(
        status_code=status_code,
        detail={"error": error, "message": message},
        headers=headers,
    )


def require_scope(scope: str) -> Callable[..., ActorId]:
    """Build a dependency granting access when the token carries ``scope``.

    The dependency resolves to the actor recorded in history: the token
    subject, or ``system`` when authentication is disabled.
    """

    def dependency(
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
        container: Container = Depends(get_container),
    ) -> ActorId:
        config = container.settings.auth
        if not config.enabled:
            return ActorId.system()

        if credentials is None:
            raise _error(status.HTTP_401_UNAUTHORIZED, "unauthorized", "Bearer token required")
        try:
            principal = TokenVerifier(config).verify(credentials.credentials)
        except TokenVerificationError as exc:
            logger.warning("Rejected bearer token: %s", exc)
            raise _error(
                status.HTTP_401_UNAUTHORIZED, "unauthorized", "Invalid bearer token"
            ) from None

        if not principal.has_scope(scope):
            logger.warning("Subject %s lacks scope %s", principal.subject, scope)
            raise _error(status.HTTP_403_FORBIDDEN, "forbidden", f"Missing scope: {scope}")
        return ActorId(principal.subject)

    return dependency


require_read = require_scope(READ_SCOPE)
require_write = require_scope(WRITE_SCOPE)
