# backend/hub/services/pipeline.py
from __future__ import annotations

import logging
from typing import Any, Dict

from hub.errors import ConfigurationError, GatewayError
from hub.services.extract import extract_json
from hub.services.features import Feature
from hub.services.gateway import GatewayClient

log = logging.getLogger(__name__)


async def run_feature(feature: Feature, body: Any, gateway: GatewayClient) -> Dict[str, Any]:
    """
    credential check -> body validation -> prompt -> one gateway call -> JSON extraction.

    Raises HubError subclasses for the mapped gateway statuses and pydantic's
    ValidationError when a required body field is absent.
    """
    if not gateway.configured:
        raise ConfigurationError("AI gateway API key is not configured")

    request = feature.request_model.model_validate(body)
    messages = feature.build_messages(request)

    log.info("Calling AI gateway for %s...", feature.label)
    try:
        content = await gateway.complete(messages, model=feature.model)
    except GatewayError as e:
        mapped = feature.errors.get(e.upstream_status)
        if mapped is not None:
            raise mapped() from e
        raise

    result = extract_json(content, feature.fallback)
    log.info("Successfully generated %s", feature.label)
    return result
