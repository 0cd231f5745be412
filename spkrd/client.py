"""Example client: play one melody on one or more spkrd servers at once.

Usage:
    spkrd-client -s http://192.168.1.100:8080 -s http://192.168.1.101:8080 "cdefgab"
"""

import argparse
import asyncio
import logging
import os
import sys
from dataclasses import dataclass

import httpx

DEFAULT_SERVER = "http://localhost:8080"
# Longer than the server's default 30s retry budget
DEFAULT_TIMEOUT = 40.0

STATUS_LABELS = {
    200: "Melody played successfully",
    400: "Invalid melody",
    503: "Device busy",
    500: "Server error",
}


@dataclass
class ServerResult:
    server: str
    ok: bool
    message: str


def classify_response(server: str, response: httpx.Response) -> ServerResult:
    label = STATUS_LABELS.get(response.status_code)
    if response.status_code == 200:
        return ServerResult(server, True, label)
    if label is None:
        return ServerResult(server, False, f"Unexpected response: HTTP {response.status_code}")
    return ServerResult(server, False, f"{label}: {response.text}")


async def play_on_server(client: httpx.AsyncClient, server: str, melody: str) -> ServerResult:
    url = f"{server.rstrip('/')}/play"
    try:
        response = await client.put(url, content=melody.encode("utf-8"))
    except httpx.HTTPError as e:
        logging.debug(f"PUT {url} failed: {e!r}")
        return ServerResult(server, False, f"Connection error: {e}")
    return classify_response(server, response)


async def play_on_servers(
    servers: list[str],
    melody: str,
    timeout: float = DEFAULT_TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[ServerResult]:
    """Send the melody to every server concurrently

    Args:
        servers (list[str]): Base URLs of the servers
        melody (str): Melody text
        timeout (float): Per-request timeout in seconds
        transport (httpx.AsyncBaseTransport | None): Custom transport, used by tests

    Returns:
        list[ServerResult]: One result per server, in the order of servers
    """
    async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
        return list(
            await asyncio.gather(*(play_on_server(client, server, melody) for server in servers))
        )


def servers_from_env() -> list[str]:
    value = os.getenv("SPKRD_SERVERS", "")
    return [server.strip() for server in value.split(",") if server.strip()]


def get_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Play a melody on spkrd servers")
    parser.add_argument("melody", type=str, help="Melody to play")
    parser.add_argument(
        "-s",
        "--server",
        action="append",
        dest="servers",
        help="Server base URL, may be repeated (default: $SPKRD_SERVERS or http://localhost:8080)",
    )
    parser.add_argument(
        "--timeout", type=float, default=DEFAULT_TIMEOUT, help="Request timeout in seconds"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = get_parser().parse_args(argv)
    logging.basicConfig(level=logging.WARNING)
    servers = args.servers or servers_from_env() or [DEFAULT_SERVER]

    print(f"Playing melody: {args.melody}")
    results = asyncio.run(play_on_servers(servers, args.melody, timeout=args.timeout))

    for result in results:
        if result.ok:
            print(f"✓ {result.server}: {result.message}")
        else:
            print(f"✗ {result.server}: {result.message}", file=sys.stderr)

    failed = sum(1 for result in results if not result.ok)
    if len(results) > 1:
        print(f"{len(results) - failed}/{len(results)} servers played the melody")
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
