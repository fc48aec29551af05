#!/usr/bin/env python3
"""
Main entrypoint serving the usage channel over HTTP.
"""
import sys
import argparse
from typing import List, Optional
from .channel import UsageChannel
from .config import DEBUG_MODE, DEBUG_LOG_PATH, CHANNEL, settings
from .web.server import create_app, find_free_port


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Serve application usage statistics")
    parser.add_argument("--port", type=int, default=None,
                        help=f"port to listen on (default: {settings.web_port} or a fallback)")
    args = parser.parse_args(argv)

    port = args.port or find_free_port(settings.web_port)
    app = create_app(UsageChannel())

    print(f"Usage channel at http://127.0.0.1:{port}/{CHANNEL}")
    if DEBUG_MODE:
        print(f"Debug logging enabled: {DEBUG_LOG_PATH}")

    app.run(host="127.0.0.1", port=port, debug=False, use_reloader=False)
    return 0


if __name__ == "__main__":
    sys.exit(main())
