"""CLI entry point for the POS terminal."""

import argparse
import asyncio
import logging
import sys

from .errors import ConfigurationError


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="POS Terminal - product lookup, purchase list and checkout")
    parser.add_argument(
        "--mode",
        choices=["stdio", "http", "console"],
        default="stdio",
        help="Mode: stdio (MCP protocol), http (REST API) or console (interactive terminal)",
    )
    parser.add_argument(
        "--host",
        default="0.0.0.0",
        help="Host to bind to (HTTP mode only, default: 0.0.0.0)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port to bind to (HTTP mode only, default: 8000)",
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable hot reloading (HTTP mode only, watches for file changes)",
    )
    parser.add_argument(
        "--env-file",
        default=None,
        help="Path to a .env file (default: .env in the working directory)",
    )

    args = parser.parse_args()

    try:
        if args.mode == "http":
            from .config import load_settings
            from .http_server import run_http_server

            # Validates before uvicorn starts and exports the .env values to
            # os.environ, where the app's lifespan (and reload workers) read them
            load_settings(args.env_file)
            print(f"Starting POS HTTP Server on {args.host}:{args.port}")
            print(f"API documentation available at http://{args.host}:{args.port}/docs")
            run_http_server(host=args.host, port=args.port, reload=args.reload)
        elif args.mode == "console":
            from .config import load_settings
            from .console import run_console
            from .terminal import build_terminal

            logging.basicConfig(level=logging.WARNING)
            terminal = build_terminal(load_settings(args.env_file))
            try:
                run_console(terminal)
            finally:
                terminal.close()
        else:
            from .server import main as server_main

            asyncio.run(server_main(args.env_file))
    except KeyboardInterrupt:
        print("\nShutting down...", file=sys.stderr)
        sys.exit(0)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
