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

"""FastAPI application entry point for Accreditation Flow."""

import logging
from contextlib import asynccontextmanager
from typing import Any, Optional, Sequence

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from accreditation_flow.api.accreditations.routes import router as accreditations_router
from accreditation_flow.api.zones.routes import router as zones_router
from accreditation_flow.config import Settings
from accreditation_flow.container import Container

API_PREFIX = "/api/v1"

logger = logging.getLogger(__name__)


def _field_name(location: Sequence[Any]) -> str:
    """Render a validation location such as ('body', 'vehicles', 0, 'plate')."""
    name = ""
    for part in location[1:]:
        if isinstance(part, int):
            name += f"[{part}]"
        else:
            name += f".{part}" if name else str(part)
    return name or str(location[0])


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed requests as 400 in the domain error shape."""
    errors = exc.errors()
    fields = [_field_name(error["loc"]) for error in errors]
    message = "; ".join(f"{name}: {error['msg']}" for name, error in zip(fields, errors))
    logger.info("Rejected %s %s: %s", request.method, request.url.path, message)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "detail": {"error": "invalid_request", "message": message, "fields": fields}
        },
    )


def create_app(container: Optional[Container] = None) -> FastAPI:
    """Create the FastAPI application.

    Args:
        container: Pre-built services; built from the environment when None.

    Returns:
        Configured FastAPI application.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if getattr(app.state, "container", None) is None:
            settings = Settings.from_env()
            logging.basicConfig(
                level=settings.log_level,
                format="%(asctime)s %(levelname)s %(name)s: %(message)s",
            )
            app.state.container = Container.from_settings(settings)
            if not settings.auth.enabled:
                logger.warning("Authentication disabled, mutations recorded as 'system'")
        logger.info("Accreditation Flow API started")
        yield

    app = FastAPI(
        title="Accreditation Flow API",
        description="Vehicle accreditation lifecycle, zone transfers and time slots",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.container = container
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.include_router(accreditations_router, prefix=API_PREFIX)
    app.include_router(zones_router, prefix=API_PREFIX)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("accreditation_flow.main:app", host="0.0.0.0", port=8000)
