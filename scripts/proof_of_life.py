"""Proof of Life: standalone demo of the marketplace client.

Run with: python scripts/proof_of_life.py
Requires: a marketplace server at MARKETLINE_HOST:MARKETLINE_PORT
(default localhost:12345)
"""

import logging
import os
import sys

from marketline import ClientConfig, LineMarketClient


def _fail(client: LineMarketClient, step: str) -> None:
    outcome = client.last_outcome
    reason = f"{outcome.error}: {outcome.detail}" if outcome else "unknown"
    print(f"FAILED ({step}: {reason})")
    client.disconnect()
    sys.exit(1)


def main() -> None:
    logging.basicConfig(
        level=os.environ.get("LOG_LEVEL", "WARNING"),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )
    config = ClientConfig.from_env()
    client = LineMarketClient(config=config)
    username = os.environ.get("MARKETLINE_USER", "demo-seller")
    password = os.environ.get("MARKETLINE_PASSWORD", "demo-password")

    print("=" * 60)
    print("  MARKETPLACE: Proof of Life")
    print("=" * 60)
    print()

    print("[1/5] Connecting...", end=" ")
    if not client.connect():
        _fail(client, "connect")
    print(f"OK ({config.host}:{config.port})")

    print(f"[2/5] Registering '{username}'...", end=" ")
    print("OK" if client.create_user(username, password) else "already exists")

    print("[3/5] Logging in...", end=" ")
    if not client.login(username, password):
        _fail(client, "login")
    print("OK")

    print("[4/5] Posting a bike for 50.00...", end=" ")
    if not client.post_item("Bike", "Proof of life bike", 50.0, username):
        _fail(client, "post")
    print("OK")

    print("[5/5] Searching for 'bike'...")
    listings = client.search_items("bike")
    for listing in listings:
        status = "sold" if listing.sold else "available"
        print(f"       #{listing.item_id} {listing.title} @ {listing.price} by {listing.seller} ({status})")

    print()
    print("=" * 60)
    print(f"  SUCCESS! Found {len(listings)} listing(s).")
    print("  The market is alive!")
    print("=" * 60)

    client.disconnect()


if __name__ == "__main__":
    main()
