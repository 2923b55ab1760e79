# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from __future__ import annotations

from typing import Iterable, Optional

import requests

from ._base import MutateParams, OperationKind, PathLike, _SanityClientBase
from .core.config import SanityConfig
from .core._http import _HttpClient
from .models.mutation import Mutation
from .models.query import Query


class SanityClient(_SanityClientBase):
    """
    Blocking client for the Sanity.io HTTP API.

    Builds request URLs and headers from a :class:`~sanity.core.config.SanityConfig`
    and delegates each call to ``requests``. Responses are returned exactly as the
    transport produced them; status codes are never inspected, so callers read
    ``response.status_code`` and ``response.json()`` themselves.

    **Context Manager Support (Recommended)**:
        Using the client as a context manager reuses one ``requests.Session``
        for all calls and closes it on exit::

            with SanityClient(config) as client:
                response = client.fetch(Query("*[_type == 'author']"))

    **Without Context Manager**:
        Each call uses a standalone request. Call ``close()`` when done if a
        session was created::

            client = SanityClient(config)
            try:
                client.mutate([Mutation.create({"_type": "author", "name": "A"})])
            finally:
                client.close()

    :param config: Connection settings for the project and dataset.
    :type config: ~sanity.core.config.SanityConfig

    :raises ~sanity.core.errors.ValidationError: If ``project_id`` or ``dataset`` is empty.
    """

    def __init__(self, config: SanityConfig) -> None:
        super().__init__(config)
        self._http: Optional[_HttpClient] = None
        self._session: Optional[requests.Session] = None
        self._owns_session: bool = False

    def __enter__(self) -> "SanityClient":
        if self._session is None:
            self._session = requests.Session()
            self._owns_session = True
            self._http = None
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """
        Close the HTTP session (if owned) and release resources.

        Safe to call multiple times.
        """
        http, self._http = self._http, None
        if self._session is not None and self._owns_session:
            if http is not None and http._session is self._session:
                http.close()
            else:
                self._session.close()
            self._session = None
            self._owns_session = False

    def _get_http(self) -> _HttpClient:
        if self._http is None:
            self._http = _HttpClient(timeout=self._config.http_timeout, session=self._session)
        return self._http

    def fetch(self, query: Query) -> requests.Response:
        """
        Execute a GROQ query.

        :param query: Query text and variables.
        :type query: ~sanity.models.query.Query
        :return: Raw transport response.
        :rtype: :class:`requests.Response`
        :raises requests.exceptions.RequestException: On transport failure.

        Example::

            q = Query("*[_type=='site' && id==$siteId][0]", {"siteId": 1})
            doc = client.fetch(q).json()["result"]
        """
        url = self._fetch_url(query)
        return self._get_http()._request("get", url, headers=self.build_headers())

    def mutate(self, mutations: Iterable[Mutation], params: MutateParams = ()) -> requests.Response:
        """
        Submit a batch of mutations as one transactional request.

        :param mutations: Mutations applied in order.
        :type mutations: Iterable[~sanity.models.mutation.Mutation]
        :param params: Query parameters such as ``returnIds``, ``returnDocuments`` or
            ``dryRun``, as a mapping or a sequence of pairs. Booleans render as ``true``/``false``.
        :return: Raw transport response.
        :rtype: :class:`requests.Response`
        :raises requests.exceptions.RequestException: On transport failure.

        Example::

            response = client.mutate(
                [Mutation.create_or_replace({"_id": "drafts.a1", "_type": "author", "name": "Random"})],
                [("returnIds", True), ("dryRun", True)],
            )
        """
        req = self._mutate_request(mutations, params)
        return self._get_http()._request(
            "post", req["url"], params=req["params"], headers=req["headers"], data=req["body"]
        )

    def upload_asset(
        self,
        path: PathLike,
        *,
        kind: OperationKind = OperationKind.IMAGES,
        content_type: Optional[str] = None,
    ) -> requests.Response:
        """
        Upload a local file as an asset. Blocks on both file I/O and the network.

        The file is read fully before any request is made.

        :param path: Path of the file to upload.
        :type path: str or os.PathLike
        :param kind: ``OperationKind.IMAGES`` (default) or ``OperationKind.FILES``.
        :type kind: ~sanity._base.OperationKind
        :param content_type: Explicit ``Content-Type``; guessed from the file name when omitted.
        :type content_type: str or None
        :return: Raw transport response.
        :rtype: :class:`requests.Response`
        :raises ~sanity.core.errors.AssetError: If the file is missing or unreadable.
        :raises requests.exceptions.RequestException: On transport failure.
        """
        req = self._upload_request(path, kind, content_type)
        return self._get_http()._request("post", req["url"], headers=req["headers"], data=req["body"])

    def upload_image(self, path: PathLike) -> requests.Response:
        """Upload an image asset. Shorthand for ``upload_asset(path, kind=OperationKind.IMAGES)``."""
        return self.upload_asset(path, kind=OperationKind.IMAGES)
