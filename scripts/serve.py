#!/usr/bin/env python3
"""
Run one of the voting services under uvicorn.

Usage:
  python scripts/serve.py voters [-H 0.0.0.0] [-p 1080]
"""
from __future__ import annotations

import argparse

import uvicorn

from voting_api.app import SERVICES, create_app
from voting_api.core.config import get_settings


def default_port(service: str) -> int:
    settings = get_settings()
    return {
        "voters": settings.voters_port,
        "polls": settings.polls_port,
        "votes": settings.votes_port,
    }[service]


def main() -> None:
    settings = get_settings()
    ap = argparse.ArgumentParser(description="Run a voting API service")
    ap.add_argument("service", choices=SERVICES, help="Service to run")
    ap.add_argument("-H", "--host", default=settings.api_host, help="Listen address (default: all interfaces)")
    ap.add_argument("-p", "--port", type=int, help="Port (default: the service's configured port)")
    args = ap.parse_args()

    port = args.port or default_port(args.service)
    if port <= 0 or port > 65535:
        ap.error("Port must be between 1 and 65535.")

    app = create_app(args.service, settings=settings)
    uvicorn.run(app, host=args.host, port=port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
