#!/usr/bin/env python3
"""
Mock server for trying out the availability checker.

Every request is answered with the next status of a scripted sequence, which
makes it easy to watch the strategy cascade move on after a retryable status.
Once the sequence is exhausted it starts over. The user agent of each request
is printed so the strategy that produced it can be identified.

A status of 0 makes the server hang for --hang seconds before answering 200,
which exceeds the budget of the first strategies.

Example:
    python utils/mock_server.py --statuses 403,503,200
    availability-checker http://localhost:8080/
"""

import argparse
import asyncio
import itertools
from typing import Iterator, List

from aiohttp import web

# Constants
PORT = 8080
HOST = "localhost"
DEFAULT_STATUSES = "200"
DEFAULT_HANG_S = 20.0


def parse_statuses(value: str) -> List[int]:
    """
    Parses a comma separated list of status codes.

    Args:
        value: The list, e.g. '403,200'.

    Returns:
        A non-empty list of status codes.
    """
    statuses = [int(item) for item in value.split(",") if item.strip()]
    if not statuses:
        raise argparse.ArgumentTypeError("At least one status is required.")
    return statuses


def init_app(statuses: List[int], hang_s: float) -> web.Application:
    """
    Initialize the web application.

    Args:
        statuses: Status codes returned in turn.
        hang_s: How long a scripted 0 keeps the request waiting.

    Returns:
        Configured aiohttp web Application
    """
    sequence: Iterator[int] = itertools.cycle(statuses)

    async def handle_request(request: web.Request) -> web.Response:
        status = next(sequence)
        user_agent = request.headers.get("User-Agent", "<none>")
        print(f"{request.method} {request.path_qs} [{user_agent}] -> {status or 'hang'}")

        if status == 0:
            await asyncio.sleep(hang_s)
            status = 200

        return web.Response(status=status, text=f"mock {status}")

    app = web.Application()
    app.add_routes([web.get("/{tail:.*}", handle_request)])
    return app


def run_server() -> None:
    """Run the mock server with the statuses given on the command line."""
    parser = argparse.ArgumentParser(description="Scripted mock server.")
    parser.add_argument("--statuses", type=parse_statuses, default=parse_statuses(DEFAULT_STATUSES))
    parser.add_argument("--hang", type=float, default=DEFAULT_HANG_S)
    parser.add_argument("--port", type=int, default=PORT)
    args = parser.parse_args()

    print(f"Starting mock server at http://{HOST}:{args.port}")
    print(f"- statuses: {', '.join(str(s) for s in args.statuses)} (0 hangs for {args.hang}s)")
    web.run_app(init_app(args.statuses, args.hang), host=HOST, port=args.port)


if __name__ == "__main__":
    run_server()
