# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Shared pytest fixtures and configuration for Sanity SDK tests.

This module provides common configurations, sample documents and temporary
asset files that can be used across all test modules.
"""

import pytest

from sanity.core.config import SanityConfig
from fixtures.test_data import (
    ACCESS_TOKEN,
    API_VERSION,
    DATASET,
    PROJECT_ID,
    SAMPLE_AUTHOR_DOCUMENT,
    SAMPLE_PNG_BYTES,
)


@pytest.fixture
def anonymous_config():
    """Configuration without token or API version."""
    return SanityConfig.new(PROJECT_ID, DATASET).build()


@pytest.fixture
def token_config():
    """Configuration with token and explicit API version."""
    return (
        SanityConfig.new(PROJECT_ID, DATASET)
        .access_token(ACCESS_TOKEN)
        .api_version(API_VERSION)
        .build()
    )


@pytest.fixture
def sample_document():
    """Copy of a sample author document."""
    return dict(SAMPLE_AUTHOR_DOCUMENT)


@pytest.fixture
def png_file(tmp_path):
    """A small PNG file on disk."""
    path = tmp_path / "image.png"
    path.write_bytes(SAMPLE_PNG_BYTES)
    return path
