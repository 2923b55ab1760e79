# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Request shaping shared by the blocking and async Sanity clients.

Everything here is a pure function of the configuration and the call's inputs:
URL formatting, header construction, parameter rendering and reading an asset
from disk. The concrete clients only add the transport call.
"""

from __future__ import annotations

import json
import mimetypes
import os
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from .core.config import SanityConfig
from .core.errors import AssetError, ValidationError
from .core._error_codes import (
    ASSET_FILE_NOT_FOUND,
    ASSET_FILE_UNREADABLE,
    ASSET_NOT_A_FILE,
    VALIDATION_DATASET_EMPTY,
    VALIDATION_PROJECT_ID_EMPTY,
)
from .models.mutation import Mutation, serialize_mutations
from .models.query import Query

PathLike = Union[str, "os.PathLike[str]"]
MutateParams = Union[Mapping[str, Any], Iterable[Tuple[str, Any]]]

_DEFAULT_CONTENT_TYPE = "application/octet-stream"


class ContentKind(Enum):
    """Top-level API area a request targets."""

    DATA = "data"
    ASSETS = "assets"


class OperationKind(Enum):
    """Operation path segment within a content area."""

    QUERY = "query"
    MUTATE = "mutate"
    IMAGES = "images"
    FILES = "files"


class _SanityClientBase:
    """
    Configuration holder with URL and header construction.

    :param config: Connection settings.
    :type config: ~sanity.core.config.SanityConfig

    :raises ~sanity.core.errors.ValidationError: If ``project_id`` or ``dataset`` is empty.
    """

    def __init__(self, config: SanityConfig) -> None:
        if not isinstance(config, SanityConfig):
            raise TypeError("config must be a SanityConfig")
        if not (config.project_id or "").strip():
            raise ValidationError("project_id is required.", subcode=VALIDATION_PROJECT_ID_EMPTY)
        if not (config.dataset or "").strip():
            raise ValidationError("dataset is required.", subcode=VALIDATION_DATASET_EMPTY)
        self._config = config

    @property
    def config(self) -> SanityConfig:
        return self._config

    def url(self, content: ContentKind, operation: OperationKind) -> str:
        """
        Format the API URL for a content area and operation.

        Example: ``https://<projectId>.api.sanity.io/v2021-06-07/data/query/<dataset>``
        """
        cfg = self._config
        return (
            f"https://{cfg.project_id}.api.sanity.io/v{cfg.effective_api_version}"
            f"/{ContentKind(content).value}/{OperationKind(operation).value}/{cfg.dataset}"
        )

    def build_headers(self) -> Dict[str, str]:
        """Return ``{"Authorization": "Bearer <token>"}`` when a token is configured, else ``{}``."""
        headers: Dict[str, str] = {}
        if self._config.access_token is not None:
            headers["Authorization"] = f"Bearer {self._config.access_token}"
        return headers

    # ----------------------------- request shaping ----------------------
    def _fetch_url(self, query: Query) -> str:
        if not isinstance(query, Query):
            raise TypeError("query must be a Query")
        return f"{self.url(ContentKind.DATA, OperationKind.QUERY)}?{query.to_query_string()}"

    def _mutate_request(self, mutations: Iterable[Mutation], params: MutateParams) -> Dict[str, Any]:
        headers = self.build_headers()
        headers["Content-Type"] = "application/json"
        return {
            "url": self.url(ContentKind.DATA, OperationKind.MUTATE),
            "params": _render_params(params),
            "headers": headers,
            "body": json.dumps(serialize_mutations(mutations)),
        }

    def _upload_request(
        self,
        path: PathLike,
        kind: OperationKind,
        content_type: Optional[str],
    ) -> Dict[str, Any]:
        if OperationKind(kind) not in (OperationKind.IMAGES, OperationKind.FILES):
            raise ValueError(f"kind must be IMAGES or FILES, got {kind!r}")
        body = _read_asset(path)
        headers = self.build_headers()
        headers["Content-Type"] = content_type or mimetypes.guess_type(os.fspath(path))[0] or _DEFAULT_CONTENT_TYPE
        return {
            "url": self.url(ContentKind.ASSETS, kind),
            "headers": headers,
            "body": body,
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._config!r})"


def _render_param_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _render_params(params: MutateParams) -> List[Tuple[str, str]]:
    """Render mutate query parameters, e.g. ``[("returnIds", True)]`` -> ``[("returnIds", "true")]``."""
    items = params.items() if isinstance(params, Mapping) else params
    return [(str(k), _render_param_value(v)) for k, v in items]


def _read_asset(path: PathLike) -> bytes:
    """Read a whole file, mapping local I/O failures to :class:`AssetError`."""
    fs_path = os.fspath(path)
    details = {"path": fs_path}
    try:
        with open(fs_path, "rb") as fh:
            return fh.read()
    except FileNotFoundError as exc:
        raise AssetError(f"Asset file not found: {fs_path}", subcode=ASSET_FILE_NOT_FOUND, details=details) from exc
    except IsADirectoryError as exc:
        raise AssetError(f"Asset path is not a file: {fs_path}", subcode=ASSET_NOT_A_FILE, details=details) from exc
    except OSError as exc:
        raise AssetError(
            f"Asset file could not be read: {fs_path}", subcode=ASSET_FILE_UNREADABLE, details=details
        ) from exc
