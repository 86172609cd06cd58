# scripts/check_proxy.py
import asyncio, sys
from pathlib import Path

# ensure repo root is on sys.path
repo_root = Path(__file__).resolve().parents[1]
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

import httpx

from core.config import settings
from core.exceptions import ProxyError
from services.extraction.proxy_client import ProxyClient


async def main(target: str) -> int:
    async with httpx.AsyncClient() as client:
        try:
            health = await client.get(settings.PROXY_BASE_URL, timeout=settings.PROXY_TIMEOUT)
        except httpx.HTTPError as exc:
            print(f"❌ proxy not reachable at {settings.PROXY_BASE_URL}: {exc!r}")
            return 1
        print(f"health {health.status_code}: {health.text[:80]}")

        proxy = ProxyClient(settings.PROXY_BASE_URL, timeout=settings.PROXY_TIMEOUT, client=client)
        try:
            body = await proxy.fetch(target)
        except ProxyError as exc:
            print(f"❌ {exc}")
            return 1
    print(f"✅ fetched {len(body)} chars from {target}")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main(sys.argv[1] if len(sys.argv) > 1 else "https://example.com")))
