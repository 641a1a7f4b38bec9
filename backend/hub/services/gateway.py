# backend/hub/services/gateway.py
from __future__ import annotations
import logging
from typing import List, Dict, Any, Optional

import httpx

from hub.config import Settings
from hub.errors import ConfigurationError, GatewayError

log = logging.getLogger(__name__)


def _as_dict(msg: Any) -> Dict[str, str]:
    if isinstance(msg, dict):
        return {"role": str(msg.get("role", "user")), "content": str(msg.get("content", ""))}
    if hasattr(msg, "model_dump"):
        d = msg.model_dump()
        return {"role": str(d.get("role", "user")), "content": str(d.get("content", ""))}
    return {"role": str(getattr(msg, "role", "user")), "content": str(getattr(msg, "content", ""))}


def _normalize_messages(messages: List[Any]) -> List[Dict[str, str]]:
    return [_as_dict(m) for m in messages]


class GatewayClient:
    """
    Single-call client for the OpenAI-compatible chat completion gateway.
    One POST per completion; no retry, no streaming.
    """

    def __init__(
        self,
        api_key: Optional[str],
        url: str,
        model: str,
        timeout: float = 90,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._api_key = api_key
        self.url = url
        self.model = model
        self._timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "GatewayClient":
        return cls(
            api_key=settings.ai_api_key,
            url=settings.ai_gateway_url,
            model=settings.ai_model,
            timeout=settings.gateway_timeout_secs,
        )

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    async def complete(self, messages: List[Dict[str, str]], model: Optional[str] = None) -> str:
        if not self.configured:
            raise ConfigurationError("AI gateway API key is not configured")

        payload: Dict[str, Any] = {
            "model": model or self.model,
            "messages": _normalize_messages(messages),
        }
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as c:
            r = await c.post(self.url, headers=headers, json=payload)
            if r.status_code < 200 or r.status_code >= 300:
                log.error("AI gateway error: %s %s", r.status_code, r.text)
                raise GatewayError(r.status_code, r.text)
            data = r.json()

        choices = data.get("choices") or [{}]
        message = (choices[0] or {}).get("message") or {}
        return message.get("content") or ""
