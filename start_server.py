#!/usr/bin/env python3
"""Start the fleet dispatch API under uvicorn, honoring the PORT environment variable."""

import os
import sys

import uvicorn


def main() -> int:
    port = os.environ.get("PORT", "8000")
    try:
        port_int = int(port)
    except ValueError:
        print(f"Warning: Invalid PORT value '{port}', using default 8000", file=sys.stderr)
        port_int = 8000

    print(f"Starting fleet dispatch API on port {port_int}...", file=sys.stderr)
    uvicorn.run(
        "fleet_dispatch.main:app",
        host="0.0.0.0",
        port=port_int,
        proxy_headers=True,
        forwarded_allow_ips="*",
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
