#!/usr/bin/env python3
"""
Example usage of terse-json.

This script walks one response through the producer-side transform hook and
back through the consumer helpers, then shows the cache and the stream API.
"""

import asyncio
import json
import logging
from terse_json import (
    TerseCache,
    TerseResponseTransformer,
    accepts_terse,
    compress_stream,
    process,
)


async def records():
    for i in range(250):
        yield {"orderId": i, "customerName": f"Customer {i}", "totalAmount": i * 9.5}


async def main():
    """Main example function."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    print("terse-json Example")
    print("=" * 50)

    users = [
        {
            "firstName": first,
            "lastName": last,
            "emailAddress": f"{first.lower()}@example.com",
            "address": {"streetAddress": f"{i} Main St", "city": city},
        }
        for i, (first, last, city) in enumerate([
            ("Alice", "Johnson", "New York"),
            ("Bob", "Smith", "Boston"),
            ("Carol", "Lee", "Chicago"),
            ("Dave", "Brown", "Denver"),
            ("Eve", "Davis", "Austin"),
        ], start=1)
    ]

    # Producer side
    transformer = TerseResponseTransformer(
        on_event=lambda event: print(f"Metrics event: {event.to_dict()}")
    )
    request_headers = {"Accept-Terse": "true"}
    body = transformer.transform(users, accepts_terse(request_headers), endpoint="/users?page=1")
    response_headers = transformer.response_headers(body)
    wire = json.dumps(body, separators=(",", ":"))

    print(f"Plain size: {len(json.dumps(users, separators=(',', ':')))} bytes")
    print(f"Terse size: {len(wire)} bytes")
    print(f"Response headers: {response_headers}")
    print(f"Wire body: {wire[:120]}...")

    # Consumer side
    view = process(json.loads(wire))
    print(f"\nview[1]['address']['city'] = {view[1]['address']['city']}")
    print(f"Keys of view[0]: {list(view[0].keys())}")
    print(f"Equal to the original: {view == users}")

    # Cache
    cache = TerseCache(max_size=100, default_ttl=60)
    cache.set("users", users)
    print(f"\nCached envelope dictionary: {cache.get_raw('users')['k']}")
    print(f"Cached first name: {cache.get('users')[0]['firstName']}")

    # Stream
    print()
    async for payload in compress_stream(records(), batch_size=100):
        print(payload.get_summary())


if __name__ == "__main__":
    asyncio.run(main())
