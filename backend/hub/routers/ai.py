# backend/hub/routers/ai.py
"""
The five AI endpoints. They are stateless: nothing is written to the database
here, the caller stores whatever it wants to keep.
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from hub.deps import get_gateway
from hub.errors import HubError
from hub.services.features import FEATURES, Feature
from hub.services.gateway import GatewayClient
from hub.services.pipeline import run_feature

log = logging.getLogger(__name__)

router = APIRouter(prefix="/functions/v1", tags=["ai"])


def _register(feature: Feature) -> None:
    async def handler(request: Request, gateway: GatewayClient = Depends(get_gateway)):
        try:
            body = await request.json()
            return await run_feature(feature, body, gateway)
        except HubError:
            raise
        except Exception as e:
            log.exception("Error in %s", feature.name)
            return JSONResponse({"error": str(e) or "Unknown error"}, status_code=500)

    handler.__name__ = feature.name.replace("-", "_")
    router.add_api_route(f"/{feature.name}", handler, methods=["POST"], name=feature.name)


for _feature in FEATURES:
    _register(_feature)
