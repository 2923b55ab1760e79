# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Core infrastructure components for the Sanity SDK.

This module contains configuration, error types and the transport adapters.
"""

from .config import DEFAULT_API_VERSION, SanityConfig, SanityConfigBuilder
from .errors import AssetError, SanityError, ValidationError

__all__ = [
    "DEFAULT_API_VERSION",
    "SanityConfig",
    "SanityConfigBuilder",
    "SanityError",
    "ValidationError",
    "AssetError",
]
