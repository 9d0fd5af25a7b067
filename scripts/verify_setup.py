"""Verify the database and the Ethereum RPC endpoint are reachable."""

from __future__ import annotations

import asyncio
import os
import sys

import httpx

from ensgraph.config import get_settings
from ensgraph.db.connection import Database


async def check_database() -> bool:
    settings = get_settings()
    db = Database(settings)
    try:
        await db.connect()
        assert await db.health_check()
        print(f"[OK] Database reachable ({db.dialect_name})")
        return True
    except Exception as exc:
        print(f"[FAIL] Database: {exc}")
        return False
    finally:
        await db.close()


async def check_rpc() -> bool:
    url = os.getenv("ETH_RPC_URL", get_settings().ETH_RPC_URL)
    try:
        async with httpx.AsyncClient() as client:
            resp = await client.post(
                url,
                json={"jsonrpc": "2.0", "id": 1, "method": "eth_blockNumber", "params": []},
                timeout=15,
            )
            resp.raise_for_status()
            block = int(resp.json()["result"], 16)
        print(f"[OK] Ethereum RPC at {url} (block {block})")
        return True
    except Exception as exc:
        print(f"[FAIL] Ethereum RPC at {url}: {exc}")
        return False


async def main() -> None:
    print("=" * 50)
    print("ensgraph: Infrastructure Verification")
    print("=" * 50)

    results = await asyncio.gather(check_database(), check_rpc())

    print("=" * 50)
    print(f"Results: {sum(results)}/{len(results)} checks passed")
    if not all(results):
        print("Some checks failed. Review output above.")
        sys.exit(1)
    print("All systems operational.")


if __name__ == "__main__":
    asyncio.run(main())
