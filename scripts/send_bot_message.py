import argparse
import asyncio
from pathlib import Path
import sys

import httpx

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.config import Settings


def _default_base_url(settings: Settings) -> str:
    host = "127.0.0.1" if settings.app_host in {"0.0.0.0", ""} else settings.app_host
    return f"http://{host}:{settings.app_port}"


async def _run(args: argparse.Namespace) -> None:
    settings = Settings()
    base_url = (args.base_url or _default_base_url(settings)).rstrip("/")
    message = " ".join(args.message).strip()
    if not message:
        raise ValueError("nothing to send: pass a message")

    async with httpx.AsyncClient(timeout=args.timeout) as client:
        response = await client.post(
            f"{base_url}/bot/message",
            json={"message": message, "userId": args.user_id},
        )
        response.raise_for_status()
        data = response.json()

    print(f"intent: {data.get('intent', {}).get('kind')}")
    print(data.get("response", ""))


def main() -> None:
    parser = argparse.ArgumentParser(description="Send one chat message to a running automator bot and print the reply.")
    parser.add_argument("message", nargs="+", help="Message text, e.g. Call +1-555-123-4567")
    parser.add_argument("--base-url", default="", help="Server base URL. Default uses APP_HOST/APP_PORT.")
    parser.add_argument("--user-id", default="cli", help="userId recorded in bot history.")
    parser.add_argument("--timeout", type=float, default=30.0, help="Client timeout in seconds.")
    args = parser.parse_args()
    asyncio.run(_run(args))


if __name__ == "__main__":
    main()
