#!/usr/bin/env python3
"""
restspine Quickstart Example

Shows the basic flow: configure a client, send typed bodies, decode
responses, handle errors. Uses the scripted transport so it runs offline.

Usage:
    python examples/01_quickstart.py
"""

import asyncio

from pydantic import BaseModel

from restspine import (
    APIError,
    ClientConfig,
    HeadersPlugin,
    HTTPMethod,
    JSONBody,
    MultipartBody,
    MultipartItem,
    RESTClient,
    TextValue,
)
from restspine.testing import MockTransport


class User(BaseModel):
    id: int
    name: str


async def main() -> None:
    """Create a user, upload an avatar caption, then hit a missing resource."""

    transport = (
        MockTransport()
        .add(201, b'{"id": 1, "name": "Ada"}')
        .add(429, headers={"retry-after": "0.5"})
        .add(204)
        .add(404, b'{"message": "User not found"}')
    )

    config = ClientConfig(
        base_url="https://api.example.com/v1",
        base_error_context="Users",
    ).with_request_plugin(HeadersPlugin({"Authorization": "Bearer demo"}))

    async with RESTClient(config, transport=transport) as client:
        user = await client.fetch_and_decode(User, HTTPMethod.POST, "users", JSONBody({"name": "Ada"}))
        print(f"✓ Created: {user}")

        # The 429 is retried after the server's hint
        await client.send(
            HTTPMethod.PUT,
            f"users/{user.id}/avatar",
            MultipartBody([MultipartItem("caption", TextValue("profile picture"))]),
        )
        print(f"✓ Uploaded after {transport.call_count - 1} attempts")

        try:
            await client.fetch_and_decode(User, HTTPMethod.GET, "users/9", error_context="fetchProfile")
        except APIError as e:
            print(f"✗ {e}")


if __name__ == "__main__":
    asyncio.run(main())
