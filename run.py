#!/usr/bin/env python3
"""
Application startup script.
"""

import argparse

import uvicorn

from app.config.settings import get_settings


def main():
    """Start the API server, letting command line flags override settings"""
    parser = argparse.ArgumentParser(description="PackPal API Server")
    parser.add_argument("--host", default=None, help="Host to bind to (overrides config)")
    parser.add_argument("--port", type=int, default=None, help="Port to bind to (overrides config)")
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Number of worker processes (overrides config)",
    )
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload (overrides config)")
    args = parser.parse_args()

    settings = get_settings()
    host = args.host or settings.host
    port = args.port or settings.port
    reload = args.reload or settings.reload
    workers = args.workers or settings.workers

    print(f"Starting {settings.app_name} v{settings.app_version}")
    print(f"   Environment: {settings.environment.value}")
    print(f"   Host: {host}")
    print(f"   Port: {port}")

    uvicorn.run(
        "app.main:app",
        host=host,
        port=port,
        reload=reload,
        workers=workers if not reload else 1,
        log_level=settings.log_level.value.lower(),
        access_log=True,
    )


if __name__ == "__main__":
    main()
