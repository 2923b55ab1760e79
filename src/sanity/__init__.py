# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Python client for the Sanity.io HTTP API.

- :class:`~sanity.client.SanityClient`: Blocking client (``requests``).
- :class:`~sanity.aio.AsyncSanityClient`: Async client (``httpx``).
- :class:`~sanity.core.config.SanityConfig`: Connection settings.
"""

from ._base import ContentKind, OperationKind
from .aio import AsyncSanityClient
from .client import SanityClient
from .core.config import DEFAULT_API_VERSION, SanityConfig, SanityConfigBuilder
from .core.errors import AssetError, SanityError, ValidationError
from .models.mutation import Mutation, MutationKind
from .models.query import Query

__version__ = "0.1.0"

__all__ = [
    "SanityClient",
    "AsyncSanityClient",
    "SanityConfig",
    "SanityConfigBuilder",
    "DEFAULT_API_VERSION",
    "ContentKind",
    "OperationKind",
    "Mutation",
    "MutationKind",
    "Query",
    "SanityError",
    "ValidationError",
    "AssetError",
]
