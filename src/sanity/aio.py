# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Non-blocking Sanity client built on ``httpx``."""

from __future__ import annotations

import asyncio
from typing import Iterable, Optional

import httpx
import requests

from ._base import MutateParams, OperationKind, PathLike, _SanityClientBase
from .client import SanityClient
from .core.config import SanityConfig
from .core._http import _AsyncHttpClient
from .models.mutation import Mutation
from .models.query import Query


class AsyncSanityClient(_SanityClientBase):
    """
    Async client for the Sanity.io HTTP API.

    ``fetch`` and ``mutate`` await ``httpx`` and never block the event loop.
    ``upload_asset`` reads the file and posts it through the blocking client in a
    worker thread (``asyncio.to_thread``), so callers can await it directly
    without arranging the thread hand-off themselves.

    Example::

        async with AsyncSanityClient(config) as client:
            response = await client.fetch(Query("*[_type == 'author']"))
            upload = await client.upload_asset("image.png")

    :param config: Connection settings for the project and dataset.
    :type config: ~sanity.core.config.SanityConfig
    :param http_client: Optional ``httpx.AsyncClient`` to send requests with. It is
        borrowed, not closed, by :meth:`aclose`.
    :type http_client: :class:`httpx.AsyncClient` or None

    :raises ~sanity.core.errors.ValidationError: If ``project_id`` or ``dataset`` is empty.
    """

    def __init__(self, config: SanityConfig, *, http_client: Optional[httpx.AsyncClient] = None) -> None:
        super().__init__(config)
        self._http = _AsyncHttpClient(timeout=config.http_timeout, client=http_client)
        self._blocking = SanityClient(config)

    async def __aenter__(self) -> "AsyncSanityClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the owned ``httpx`` client. Safe to call multiple times."""
        await self._http.aclose()
        self._blocking.close()

    async def fetch(self, query: Query) -> httpx.Response:
        """
        Execute a GROQ query.

        :return: Raw transport response.
        :rtype: :class:`httpx.Response`
        :raises httpx.HTTPError: On transport failure.
        """
        url = self._fetch_url(query)
        return await self._http._request("GET", url, headers=self.build_headers())

    async def mutate(self, mutations: Iterable[Mutation], params: MutateParams = ()) -> httpx.Response:
        """
        Submit a batch of mutations as one transactional request.

        See :meth:`sanity.client.SanityClient.mutate` for the parameter format.

        :rtype: :class:`httpx.Response`
        :raises httpx.HTTPError: On transport failure.
        """
        req = self._mutate_request(mutations, params)
        return await self._http._request(
            "POST", req["url"], params=req["params"], headers=req["headers"], content=req["body"]
        )

    async def upload_asset(
        self,
        path: PathLike,
        *,
        kind: OperationKind = OperationKind.IMAGES,
        content_type: Optional[str] = None,
    ) -> requests.Response:
        """
        Upload a local file as an asset on a worker thread.

        :return: Raw response from the blocking transport.
        :rtype: :class:`requests.Response`
        :raises ~sanity.core.errors.AssetError: If the file is missing or unreadable.
        :raises requests.exceptions.RequestException: On transport failure.
        """
        return await asyncio.to_thread(
            self._blocking.upload_asset, path, kind=kind, content_type=content_type
        )

    async def upload_image(self, path: PathLike) -> requests.Response:
        """Upload an image asset on a worker thread. Shorthand for ``upload_asset(path, kind=OperationKind.IMAGES)``."""
        return await self.upload_asset(path, kind=OperationKind.IMAGES)
