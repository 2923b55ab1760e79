# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

import json
import os
import tempfile
import unittest
from unittest.mock import MagicMock

import pytest
import requests

from sanity import ContentKind, OperationKind
from sanity.client import SanityClient
from sanity.core.config import SanityConfig
from sanity.core.errors import AssetError, ValidationError
from sanity.core._error_codes import (
    ASSET_FILE_NOT_FOUND,
    ASSET_NOT_A_FILE,
    VALIDATION_DATASET_EMPTY,
    VALIDATION_PROJECT_ID_EMPTY,
)
from sanity.models.mutation import Mutation
from sanity.models.query import Query
from fixtures.test_data import (
    ACCESS_TOKEN,
    API_VERSION,
    DATASET,
    PROJECT_ID,
    SAMPLE_AUTHOR_DOCUMENT,
    SAMPLE_PNG_BYTES,
    SITE_QUERY,
    SITE_QUERY_ENCODED,
)


class _ClientTestBase(unittest.TestCase):
    def setUp(self):
        """Set up a client whose session is a mock, so no HTTP call leaves the process."""
        self.config = (
            SanityConfig.new(PROJECT_ID, DATASET).access_token(ACCESS_TOKEN).api_version(API_VERSION).build()
        )
        self.client = SanityClient(self.config)
        self.session = MagicMock(spec=requests.Session)
        self.session.request.return_value = MagicMock(status_code=200)
        self.client._session = self.session
        self.client._owns_session = True

    def last_call(self):
        args, kwargs = self.session.request.call_args
        return args[0], args[1], kwargs


class TestUrlAndHeaders(unittest.TestCase):
    def test_url_default_version(self):
        client = SanityClient(SanityConfig.new("p", "d").build())
        self.assertEqual(
            client.url(ContentKind.DATA, OperationKind.QUERY),
            "https://p.api.sanity.io/v2021-06-07/data/query/d",
        )

    def test_url_configured_version(self):
        client = SanityClient(SanityConfig.new(PROJECT_ID, DATASET).api_version(API_VERSION).build())
        base = f"https://{PROJECT_ID}.api.sanity.io/v{API_VERSION}"
        self.assertEqual(client.url(ContentKind.DATA, OperationKind.QUERY), f"{base}/data/query/{DATASET}")
        self.assertEqual(client.url(ContentKind.DATA, OperationKind.MUTATE), f"{base}/data/mutate/{DATASET}")
        self.assertEqual(client.url(ContentKind.ASSETS, OperationKind.IMAGES), f"{base}/assets/images/{DATASET}")
        self.assertEqual(client.url(ContentKind.ASSETS, OperationKind.FILES), f"{base}/assets/files/{DATASET}")

    def test_headers_without_token(self):
        client = SanityClient(SanityConfig.new("p", "d").build())
        self.assertEqual(client.build_headers(), {})

    def test_headers_with_token(self):
        client = SanityClient(SanityConfig.new("p", "d").access_token("abc").build())
        self.assertEqual(client.build_headers(), {"Authorization": "Bearer abc"})

    def test_headers_are_fresh_per_call(self):
        client = SanityClient(SanityConfig.new("p", "d").access_token("abc").build())
        first = client.build_headers()
        first["X-Extra"] = "1"
        self.assertNotIn("X-Extra", client.build_headers())

    def test_empty_project_id_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            SanityClient(SanityConfig.new("", "d").build())
        self.assertEqual(ctx.exception.subcode, VALIDATION_PROJECT_ID_EMPTY)

    def test_blank_dataset_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            SanityClient(SanityConfig.new("p", "  ").build())
        self.assertEqual(ctx.exception.subcode, VALIDATION_DATASET_EMPTY)

    def test_requires_config_instance(self):
        with self.assertRaises(TypeError):
            SanityClient({"project_id": "p", "dataset": "d"})


class TestFetch(_ClientTestBase):
    def test_fetch_builds_get_with_encoded_query_and_variables(self):
        response = self.client.fetch(Query(SITE_QUERY, {"siteId": 1}))

        method, url, kwargs = self.last_call()
        self.assertEqual(method, "get")
        self.assertEqual(
            url,
            f"https://{PROJECT_ID}.api.sanity.io/v{API_VERSION}/data/query/{DATASET}"
            f"?query={SITE_QUERY_ENCODED}&$siteId=1",
        )
        self.assertEqual(kwargs["headers"], {"Authorization": f"Bearer {ACCESS_TOKEN}"})
        self.assertIs(response, self.session.request.return_value)

    def test_fetch_returns_error_status_unchanged(self):
        self.session.request.return_value = MagicMock(status_code=403)
        response = self.client.fetch(Query("*"))
        self.assertEqual(response.status_code, 403)

    def test_fetch_propagates_transport_error(self):
        self.session.request.side_effect = requests.exceptions.Timeout("slow")
        with self.assertRaises(requests.exceptions.Timeout):
            self.client.fetch(Query("*"))

    def test_fetch_rejects_plain_string(self):
        with self.assertRaises(TypeError):
            self.client.fetch("*[_type == 'post']")
        self.session.request.assert_not_called()


class TestMutate(_ClientTestBase):
    def test_mutate_posts_envelope_with_params(self):
        mutations = [
            Mutation.create_or_replace(SAMPLE_AUTHOR_DOCUMENT),
            Mutation.delete({"id": "old-doc"}),
        ]

        self.client.mutate(mutations, [("returnIds", True), ("returnDocuments", False), ("dryRun", True)])

        method, url, kwargs = self.last_call()
        self.assertEqual(method, "post")
        self.assertEqual(url, f"https://{PROJECT_ID}.api.sanity.io/v{API_VERSION}/data/mutate/{DATASET}")
        self.assertEqual(
            kwargs["params"],
            [("returnIds", "true"), ("returnDocuments", "false"), ("dryRun", "true")],
        )
        self.assertEqual(
            json.loads(kwargs["data"]),
            {"mutations": [{"createOrReplace": SAMPLE_AUTHOR_DOCUMENT}, {"delete": {"id": "old-doc"}}]},
        )
        self.assertEqual(kwargs["headers"]["Authorization"], f"Bearer {ACCESS_TOKEN}")
        self.assertEqual(kwargs["headers"]["Content-Type"], "application/json")

    def test_mutate_accepts_mapping_params_and_defaults_to_none(self):
        self.client.mutate([Mutation.create({"_type": "a"})], {"visibility": "async"})
        self.assertEqual(self.last_call()[2]["params"], [("visibility", "async")])

        self.client.mutate([Mutation.create({"_type": "a"})])
        self.assertEqual(self.last_call()[2]["params"], [])

    def test_mutate_without_token_sends_no_authorization(self):
        client = SanityClient(SanityConfig.new("p", "d").build())
        client._session = self.session
        client.mutate([Mutation.create({"_type": "a"})])
        headers = self.session.request.call_args.kwargs["headers"]
        self.assertNotIn("Authorization", headers)


class TestUploadAsset(_ClientTestBase):
    def setUp(self):
        super().setUp()
        self.tmpdir = tempfile.TemporaryDirectory()
        self.image_path = os.path.join(self.tmpdir.name, "image.png")
        with open(self.image_path, "wb") as fh:
            fh.write(SAMPLE_PNG_BYTES)

    def tearDown(self):
        self.tmpdir.cleanup()

    def test_upload_posts_raw_bytes(self):
        self.client.upload_asset(self.image_path)

        method, url, kwargs = self.last_call()
        self.assertEqual(method, "post")
        self.assertEqual(url, f"https://{PROJECT_ID}.api.sanity.io/v{API_VERSION}/assets/images/{DATASET}")
        self.assertEqual(kwargs["data"], SAMPLE_PNG_BYTES)
        self.assertEqual(kwargs["headers"]["Content-Type"], "image/png")
        self.assertEqual(kwargs["headers"]["Authorization"], f"Bearer {ACCESS_TOKEN}")
        self.assertNotIn("params", kwargs)

    def test_upload_image_alias(self):
        self.client.upload_image(self.image_path)
        self.assertTrue(self.last_call()[1].endswith(f"/assets/images/{DATASET}"))

    def test_upload_file_kind_and_explicit_content_type(self):
        self.client.upload_asset(self.image_path, kind=OperationKind.FILES, content_type="application/x-custom")
        _, url, kwargs = self.last_call()
        self.assertTrue(url.endswith(f"/assets/files/{DATASET}"))
        self.assertEqual(kwargs["headers"]["Content-Type"], "application/x-custom")

    def test_unknown_extension_uses_octet_stream(self):
        path = os.path.join(self.tmpdir.name, "blob.sanityunknownext")
        with open(path, "wb") as fh:
            fh.write(b"abc")
        self.client.upload_asset(path, kind=OperationKind.FILES)
        self.assertEqual(self.last_call()[2]["headers"]["Content-Type"], "application/octet-stream")

    def test_missing_file_fails_before_network(self):
        with self.assertRaises(AssetError) as ctx:
            self.client.upload_asset(os.path.join(self.tmpdir.name, "missing.png"))
        self.assertEqual(ctx.exception.subcode, ASSET_FILE_NOT_FOUND)
        self.assertIsInstance(ctx.exception.__cause__, FileNotFoundError)
        self.session.request.assert_not_called()

    @unittest.skipIf(os.name == "nt", "opening a directory raises PermissionError on Windows")
    def test_directory_path_fails_before_network(self):
        with self.assertRaises(AssetError) as ctx:
            self.client.upload_asset(self.tmpdir.name)
        self.assertEqual(ctx.exception.subcode, ASSET_NOT_A_FILE)
        self.session.request.assert_not_called()

    def test_query_kind_is_not_an_upload_target(self):
        with self.assertRaises(ValueError):
            self.client.upload_asset(self.image_path, kind=OperationKind.QUERY)
        self.session.request.assert_not_called()


# ---------------- pytest-style tests using shared conftest fixtures ----------------


def _mock_session(status_code=200):
    session = MagicMock(spec=requests.Session)
    session.request.return_value = MagicMock(status_code=status_code)
    return session


def _client_with_session(config, session):
    client = SanityClient(config)
    client._session = session
    return client


def test_empty_api_version_is_used_verbatim():
    client = SanityClient(SanityConfig.new("p", "d").api_version("").build())
    assert client.url(ContentKind.DATA, OperationKind.QUERY) == "https://p.api.sanity.io/v/data/query/d"


def test_anonymous_config_uses_default_version_and_no_auth(anonymous_config):
    session = _mock_session()
    client = _client_with_session(anonymous_config, session)

    client.fetch(Query("*"))

    args, kwargs = session.request.call_args
    assert args[1].startswith(f"https://{PROJECT_ID}.api.sanity.io/v2021-06-07/data/query/{DATASET}?")
    assert kwargs["headers"] == {}
    assert "timeout" not in kwargs


def test_http_timeout_reaches_session(token_config):
    config = SanityConfig.create(
        token_config.project_id,
        token_config.dataset,
        access_token=token_config.access_token,
        api_version=token_config.api_version,
        http_timeout=5.0,
    )
    session = _mock_session()
    client = _client_with_session(config, session)

    client.fetch(Query("*"))
    client.mutate([Mutation.create({"_type": "author"})])

    for _, kwargs in session.request.call_args_list:
        assert kwargs["timeout"] == 5.0


def test_builder_http_timeout_reaches_upload(token_config, png_file):
    config = SanityConfig.new(token_config.project_id, token_config.dataset).http_timeout(5.0).build()
    session = _mock_session()
    client = _client_with_session(config, session)

    client.upload_asset(png_file)

    kwargs = session.request.call_args.kwargs
    assert kwargs["timeout"] == 5.0
    assert kwargs["data"] == SAMPLE_PNG_BYTES


def test_upload_with_token_config(token_config, png_file):
    session = _mock_session(status_code=201)
    client = _client_with_session(token_config, session)

    response = client.upload_image(png_file)

    args, kwargs = session.request.call_args
    assert response.status_code == 201
    assert args == ("post", f"https://{PROJECT_ID}.api.sanity.io/v{API_VERSION}/assets/images/{DATASET}")
    assert kwargs["headers"]["Authorization"] == f"Bearer {ACCESS_TOKEN}"
    assert kwargs["headers"]["Content-Type"] == "image/png"


def test_missing_upload_with_fixture_path_sends_nothing(token_config, png_file):
    session = _mock_session()
    client = _client_with_session(token_config, session)

    with pytest.raises(AssetError):
        client.upload_asset(png_file.with_name("absent.png"))
    session.request.assert_not_called()
