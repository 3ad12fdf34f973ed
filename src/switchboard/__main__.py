"""CLI entry point for switchboard.

It can be invoked as `switchboard` (via the script entry point) or
`python -m switchboard`.
"""

import argparse
import sys

import uvicorn

from switchboard import __version__, create_app
from switchboard.config import SwitchboardSettings
from switchboard.logging_setup import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="switchboard",
        description="Conversational assistant that delegates to tool-providing agents via Ollama",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"switchboard {__version__}",
    )
    parser.add_argument(
        "--host",
        type=str,
        default=None,
        help="Host to bind the server to (default: 127.0.0.1, can be set via SWITCHBOARD_HOST)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to bind the server to (default: 8000, can be set via SWITCHBOARD_PORT)",
    )
    parser.add_argument(
        "--ollama-host",
        type=str,
        default=None,
        help="Ollama server URL (default: http://localhost:11434, can be set via SWITCHBOARD_OLLAMA_HOST)",
    )
    parser.add_argument(
        "--model",
        type=str,
        default=None,
        help="Model used for every turn (default: llama3.1:8b, can be set via SWITCHBOARD_MODEL)",
    )
    parser.add_argument(
        "--data-dir",
        type=str,
        default=None,
        help="Base directory for agent data (default: ., can be set via SWITCHBOARD_DATA_DIR)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: INFO, can be set via SWITCHBOARD_LOG_LEVEL)",
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development (uvicorn --reload)",
    )
    return parser


def settings_from_args(args: argparse.Namespace) -> SwitchboardSettings:
    """Build settings; CLI args override environment variables."""
    overrides = {
        "host": args.host,
        "port": args.port,
        "ollama_host": args.ollama_host,
        "model": args.model,
        "data_dir": args.data_dir,
        "log_level": args.log_level,
    }
    return SwitchboardSettings(**{k: v for k, v in overrides.items() if v is not None})


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the switchboard CLI.

    Parses command-line arguments, configures logging and starts the
    uvicorn server with the FastAPI application.
    """
    args = build_parser().parse_args(argv)
    settings = settings_from_args(args)
    setup_logging(settings.log_level)

    app = create_app(settings=settings)

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        reload=args.reload,
    )


if __name__ == "__main__":
    sys.exit(main())
