# app/providers/mobile_money/http.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

import httpx

from app.payments.base import ProviderError
from services.redaction import redact_dict, redact_text

logger = logging.getLogger("buildmart.http")


@dataclass
class HttpResponse:
    status_code: int
    json: Optional[dict[str, Any]]
    text: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def to_error(self) -> ProviderError:
        return ProviderError.from_response(self.status_code, self.json, self.text)


class HttpClient:
    def __init__(self, timeout_s: float = 20.0, follow_redirects: bool = True):
        self._client = httpx.Client(timeout=timeout_s, follow_redirects=follow_redirects)

    def post(
        self,
        url: str,
        *,
        headers: dict[str, str],
        json_body: dict[str, Any] | None = None,
        debug: bool = False,
    ) -> HttpResponse:
        try:
            r = self._client.post(url, headers=headers, json=json_body)
        except httpx.HTTPError as exc:
            raise ProviderError.from_exception(exc) from exc
        if debug:
            self._debug_dump("POST", url, headers, json_body, r)
        return self._wrap(r)

    def get(
        self,
        url: str,
        *,
        headers: dict[str, str],
        debug: bool = False,
    ) -> HttpResponse:
        try:
            r = self._client.get(url, headers=headers)
        except httpx.HTTPError as exc:
            raise ProviderError.from_exception(exc) from exc
        if debug:
            self._debug_dump("GET", url, headers, None, r)
        return self._wrap(r)

    @staticmethod
    def _wrap(r: httpx.Response) -> HttpResponse:
        try:
            payload = r.json()
        except ValueError:
            payload = None
        if not isinstance(payload, dict):
            payload = None
        return HttpResponse(status_code=r.status_code, json=payload, text=r.text)

    @staticmethod
    def _debug_dump(method: str, url: str, headers: dict[str, str], json_body: Any, r: httpx.Response) -> None:
        if not logger.isEnabledFor(logging.DEBUG):
            return
        logger.debug("%s %s -> status=%s", method, url, r.status_code)
        logger.debug("headers=%s", redact_dict(dict(headers or {})))
        if json_body is not None:
            logger.debug("json=%s", redact_dict(json_body))
        logger.debug("text=%s", redact_text(r.text[:300]))
