"""Serve the URL shortener over HTTP

Usage:
    python -m localshortener [--env-file .env] [--host 0.0.0.0] [--port 8000]

Steps:
    - Load `.env` into the environment (real environment variables win)
    - Initialize JSON logging
    - Load configuration and build the application
    - Serve with uvicorn until SIGINT/SIGTERM, then drain in-flight requests
      and close the store
"""

import sys
import logging
import argparse

import uvicorn
from dotenv import load_dotenv

from localshortener.api import create_app
from localshortener.exceptions import ConfigurationError
from localshortener.utils import initialize_logging, load_config


logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog='localshortener',
        description='URL shortener backed by an embedded key-value store',
    )
    parser.add_argument('--env-file', default='.env', help='dotenv file to load before reading configuration (default: .env)')
    parser.add_argument('--host', default=None, help='Bind address (default: HOST or 0.0.0.0)')
    parser.add_argument('--port', type=int, default=None, help='Bind port (default: PORT or 8000)')
    args = parser.parse_args(argv)

    load_dotenv(args.env_file, override=False)
    initialize_logging()

    try:
        config = load_config()
    except ConfigurationError:
        logger.exception('Invalid configuration. Exiting.')
        sys.exit(1)

    host = args.host or config['api']['host']
    port = args.port or config['api']['port']
    logger.info('Starting HTTP server.', extra={'host': host, 'port': port})

    # log_config=None keeps the JSON logging configured above
    uvicorn.run(create_app(config), host=host, port=port, log_config=None)


if __name__ == '__main__':
    main()
