# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Thin transport adapters over ``requests`` (blocking) and ``httpx`` (async).

Both adapters forward a request exactly once and hand back the library's
response object untouched. They never retry and never raise on HTTP status;
transport exceptions propagate unchanged to the caller.
"""

from __future__ import annotations

import logging
from typing import Any, Optional
from urllib.parse import urlsplit

import httpx
import requests

logger = logging.getLogger(__name__)


def _loggable(url: str) -> str:
    # Query strings carry GROQ text and parameter values; keep them out of logs.
    parts = urlsplit(url)
    return f"{parts.scheme}://{parts.netloc}{parts.path}"


def _log_response(method: str, url: str, status_code: int) -> None:
    level = logging.WARNING if status_code >= 400 else logging.DEBUG
    logger.log(level, "%s %s -> %s", method.upper(), _loggable(url), status_code)


class _HttpClient:
    """
    Blocking HTTP transport with optional session support.

    :param timeout: Request timeout in seconds. If None, no timeout is passed and
        the ``requests`` default applies.
    :type timeout: :class:`float` | None
    :param session: Optional requests.Session for connection pooling. If provided,
        all requests use this session.
    :type session: :class:`requests.Session` | None
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.default_timeout: Optional[float] = timeout
        self._session = session

    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        """
        Execute a single HTTP request.

        :param method: HTTP method (GET, POST, ...).
        :type method: :class:`str`
        :param url: Fully formatted target URL.
        :type url: :class:`str`
        :param kwargs: Additional arguments passed to ``requests.request()`` or
            ``session.request()``, including headers, params, data.
        :return: HTTP response object, whatever its status code.
        :rtype: :class:`requests.Response`
        :raises requests.exceptions.RequestException: On any transport failure.
        """
        if "timeout" not in kwargs and self.default_timeout is not None:
            kwargs["timeout"] = self.default_timeout

        logger.debug("%s %s", method.upper(), _loggable(url))
        if self._session is not None:
            response = self._session.request(method, url, **kwargs)
        else:
            response = requests.request(method, url, **kwargs)
        _log_response(method, url, response.status_code)
        return response

    def close(self) -> None:
        """
        Close the session if one was provided. Safe to call multiple times.
        """
        if self._session is not None:
            self._session.close()
            self._session = None


class _AsyncHttpClient:
    """
    Non-blocking HTTP transport over :class:`httpx.AsyncClient`.

    The underlying client is created lazily on the first request unless one is
    supplied. A supplied client is borrowed and is not closed by :meth:`aclose`.

    :param timeout: Request timeout in seconds. If None, the ``httpx`` default applies.
    :type timeout: :class:`float` | None
    :param client: Optional pre-built ``httpx.AsyncClient`` (e.g. with a mock transport).
    :type client: :class:`httpx.AsyncClient` | None
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.default_timeout: Optional[float] = timeout
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient()
            self._owns_client = True
        return self._client

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """
        Execute a single HTTP request without blocking the event loop.

        :raises httpx.HTTPError: On any transport failure.
        """
        if "timeout" not in kwargs and self.default_timeout is not None:
            kwargs["timeout"] = self.default_timeout

        logger.debug("%s %s", method.upper(), _loggable(url))
        response = await self._get_client().request(method, url, **kwargs)
        _log_response(method, url, response.status_code)
        return response

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
        self._client = None
