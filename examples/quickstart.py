# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Sanity SDK quickstart.

Runs a query and a dry-run mutation with the blocking client, then the same
query plus an image upload with the async client. The upload is awaited
directly; the client moves the blocking file read and POST to a worker thread.

Usage::

    python examples/quickstart.py <project_id> <dataset> [token] [image_path]
"""

import asyncio
import logging
import sys
from pathlib import Path

# Add src to PYTHONPATH for local runs
sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))

from sanity import AsyncSanityClient, Mutation, Query, SanityClient, SanityConfig
from sanity.core.errors import AssetError


def run_blocking(config: SanityConfig) -> None:
    with SanityClient(config) as client:
        response = client.fetch(Query("*[_type == $type][0...3]{_id, name}", {"type": "author"}))
        print({"call": "fetch", "status": response.status_code, "body": response.json()})

        response = client.mutate(
            [Mutation.create({"_type": "author", "name": "Quickstart Author"})],
            [("returnIds", True), ("dryRun", True)],
        )
        print({"call": "mutate (dry run)", "status": response.status_code, "body": response.json()})


async def run_async(config: SanityConfig, image_path: str) -> None:
    async with AsyncSanityClient(config) as client:
        response = await client.fetch(Query("count(*[_type == 'author'])"))
        print({"call": "async fetch", "status": response.status_code, "body": response.json()})

        if not image_path:
            return
        try:
            response = await client.upload_asset(image_path)
        except AssetError as exc:
            print({"call": "upload_asset", "error": exc.to_dict()})
            return
        print({"call": "upload_asset", "status": response.status_code, "body": response.json()})


def main() -> None:
    if len(sys.argv) < 3:
        print(__doc__)
        sys.exit(1)
    logging.basicConfig(level=logging.DEBUG)

    builder = SanityConfig.new(sys.argv[1], sys.argv[2])
    if len(sys.argv) > 3 and sys.argv[3]:
        builder = builder.access_token(sys.argv[3])
    config = builder.build()
    image_path = sys.argv[4] if len(sys.argv) > 4 else ""

    run_blocking(config)
    asyncio.run(run_async(config, image_path))


if __name__ == "__main__":
    main()
