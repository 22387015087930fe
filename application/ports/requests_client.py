# application/ports/requests_client.py
from __future__ import annotations

from typing import Dict, Optional

import requests

from application.ports.http_client import HttpClientPort, HttpResponse, RequestBody


class RequestsSessionHttpClient(HttpClientPort):
    def __init__(self, base_headers: Optional[Dict[str, str]] = None, timeout_sec: float = 30):
        self._session = requests.Session()
        self._base_headers = base_headers or {}
        self._timeout = timeout_sec

    def request(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        data: RequestBody = None,
    ) -> HttpResponse:
        merged = dict(self._base_headers)
        if headers:
            merged.update(headers)

        # connection errors propagate as requests' own exceptions
        resp = self._session.request(
            method=method.upper(),
            url=url,
            headers=merged,
            data=data,
            timeout=self._timeout,
            allow_redirects=True,
        )

        return HttpResponse(
            status=resp.status_code,
            url=str(resp.url),
            text=resp.text,
            headers=dict(resp.headers),
            encoding=resp.encoding,
        )

    def close(self) -> None:
        self._session.close()
