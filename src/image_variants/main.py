"""Main module for the image variants service CLI."""

import os
import sys
import argparse

import uvicorn

from .core.config import ServiceConfig
from .core.exceptions import ConfigurationError
from .core.logging_config import get_logger


def main() -> None:
    """
    Entry point for the ``image-variants`` command.

    ``serve`` loads the configuration from the environment, applies any
    command-line overrides and runs the HTTP API under uvicorn.
    """
    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        prog="image-variants",
        description="Image Variants - resize and watermark service backed by S3 and DynamoDB",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Serve on the port from LOCAL_SERVER_PORT (default 5000)
  image-variants serve

  # Serve on a specific address with a local watermark file
  image-variants serve --host 127.0.0.1 --port 8080 --watermark-asset ./logo.png

  # Serve the web front end from ./static
  image-variants serve --static-dir ./static

  # Show version
  image-variants version
        """,
    )

    subparsers: argparse._SubParsersAction = parser.add_subparsers(
        dest="command", help="Available commands"
    )

    serve_parser: argparse.ArgumentParser = subparsers.add_parser(
        "serve", help="Run the HTTP API"
    )
    serve_parser.add_argument("--host", default=None, help="Bind address")
    serve_parser.add_argument("--port", type=int, default=None, help="Bind port")
    serve_parser.add_argument(
        "--watermark-asset",
        default=None,
        help="Local image file provisioned as the watermark at startup",
    )
    serve_parser.add_argument(
        "--static-dir",
        default=None,
        help="Directory with the web front end, served at / and /static",
    )
    serve_parser.add_argument(
        "--debug", action="store_true", help="Enable debug logging"
    )

    subparsers.add_parser("version", help="Show version information")

    args: argparse.Namespace = parser.parse_args()

    if args.command == "serve":
        logger = get_logger("image-variants")
        try:
            config = ServiceConfig.from_env()
        except ConfigurationError as exc:
            logger.error(str(exc))
            sys.exit(2)

        overrides = {}
        if args.host:
            overrides["host"] = args.host
        if args.port:
            overrides["port"] = args.port
        if args.watermark_asset:
            overrides["watermark_asset_path"] = args.watermark_asset
        if args.static_dir:
            overrides["static_dir"] = args.static_dir
        if overrides:
            config = config.model_copy(update=overrides)

        if args.debug:
            os.environ["LOG_LEVEL"] = "DEBUG"
            logger.setLevel("DEBUG")

        from .api import create_app

        logger.info(f"Starting image variants API on {config.host}:{config.port}")
        uvicorn.run(
            create_app(config=config),
            host=config.host,
            port=config.port,
            log_level="debug" if args.debug else "info",
        )

    elif args.command == "version":
        print("Image Variants")
        print("Version 0.1.0")
        print("Resize and watermark service backed by S3 and DynamoDB")
        sys.exit(0)

    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
