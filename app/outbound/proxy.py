import logging
import time
from typing import Any

import httpx

from app.models.proxy import ProxyRequest, ProxyResult

logger = logging.getLogger(__name__)

_BODYLESS_METHODS = {"GET", "HEAD", "OPTIONS"}


class OutboundRequestProxy:
    def __init__(
        self,
        default_timeout_ms: int = 30000,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._default_timeout_ms = default_timeout_ms
        self._transport = transport

    async def execute(self, request: ProxyRequest, *, timeout_ms: int | None = None) -> ProxyResult:
        method = (request.method or "GET").strip().upper() or "GET"
        url = (request.url or "").strip()
        if not url:
            return ProxyResult(success=False, error="url is required")

        effective_timeout_ms = request.timeout or timeout_ms or self._default_timeout_ms
        headers = {str(key): str(value) for key, value in request.headers.items() if value is not None}
        started = time.monotonic()

        try:
            async with httpx.AsyncClient(
                timeout=effective_timeout_ms / 1000.0,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                response = await client.request(
                    method,
                    url,
                    headers=headers,
                    **self._body_kwargs(method, request.body),
                )
        except httpx.TimeoutException:
            logger.warning("outbound %s %s timed out after %sms", method, url, effective_timeout_ms)
            return self._failure(f"timeout of {effective_timeout_ms}ms exceeded", started)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning("outbound %s %s failed: %s", method, url, exc)
            return self._failure(str(exc) or exc.__class__.__name__, started)
        except Exception as exc:
            logger.exception("unexpected outbound request failure: %s %s", method, url)
            return self._failure(str(exc) or exc.__class__.__name__, started)

        duration_ms = self._elapsed_ms(started)
        logger.info("outbound %s %s -> %s in %sms", method, url, response.status_code, duration_ms)
        return ProxyResult(
            success=True,
            status=response.status_code,
            data=self._decode_body(response),
            headers=dict(response.headers),
            duration_ms=duration_ms,
        )

    @staticmethod
    def _body_kwargs(method: str, body: Any) -> dict[str, Any]:
        if body is None or method in _BODYLESS_METHODS:
            return {}
        if isinstance(body, (str, bytes)):
            return {"content": body}
        return {"json": body}

    @staticmethod
    def _decode_body(response: httpx.Response) -> Any:
        if not response.content:
            return ""
        try:
            return response.json()
        except ValueError:
            return response.text

    @classmethod
    def _failure(cls, message: str, started: float) -> ProxyResult:
        return ProxyResult(success=False, error=message, duration_ms=cls._elapsed_ms(started))

    @staticmethod
    def _elapsed_ms(started: float) -> int:
        return int((time.monotonic() - started) * 1000)
