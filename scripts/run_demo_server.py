#!/usr/bin/env python3
"""
Dropbox login demo server.

Starts the demo Flask front-end: open http://localhost:3000/ in a browser,
accept the application on Dropbox, and the callback page shows the
account info fetched with the new access token.

Usage:
    export DROPBOX_CONSUMER_KEY="your_app_key"
    export DROPBOX_CONSUMER_SECRET="your_app_secret"
    python scripts/run_demo_server.py

    # Use the full Dropbox root instead of the app sandbox
    python scripts/run_demo_server.py --context dropbox
"""

import argparse
import logging
import os
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from netdropbox.oauth.auth_server import config_from_env, create_app
from netdropbox.oauth.config import VALID_ROOTS
from netdropbox.oauth.exceptions import ConfigurationError

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Dropbox OAuth login demo server")
    parser.add_argument("--host", default="127.0.0.1", help="Interface to bind (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=3000, help="Port to listen on (default: 3000)")
    parser.add_argument(
        "--context",
        choices=VALID_ROOTS,
        help="Root namespace (default: DROPBOX_CONTEXT or sandbox)",
    )
    parser.add_argument("--debug", action="store_true", help="Log tokens and responses")
    args = parser.parse_args()

    if args.context:
        os.environ["DROPBOX_CONTEXT"] = args.context

    try:
        config = config_from_env()
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return 1

    if args.debug:
        config.debug = True
        logging.getLogger("netdropbox").setLevel(logging.DEBUG)

    app = create_app(config)
    logger.info(f"Open http://{args.host}:{args.port}/ to log in to Dropbox")
    logger.info(f"Callback URL: {config.callback_url}")
    app.run(host=args.host, port=args.port, debug=False, use_reloader=False, threaded=True)
    return 0


if __name__ == "__main__":
    sys.exit(main())
