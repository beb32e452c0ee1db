"""
Run the to-do API server.

Usage:
    python -m app
    python -m app --reload  # Development mode
"""

import argparse

import uvicorn

from app.config import load_config


def main():
    parser = argparse.ArgumentParser(description="Run the to-do API server")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    parser.add_argument("--host", type=str, help="Host to bind to")
    parser.add_argument("--port", type=int, help="Port to bind to")
    args = parser.parse_args()

    config = load_config()

    uvicorn.run(
        "app.main:app",
        host=args.host or config.host,
        port=args.port or config.port,
        reload=args.reload,
    )


if __name__ == "__main__":
    main()
