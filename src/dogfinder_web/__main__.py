from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

import uvicorn

from dogfinder_web.app import create_app
from dogfinder_web.config import ENV_CONFIG, load_server_config
from dogfinder_web.logs import configure_logging


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="dogfinder-web",
        description="Serve the DogFinder web build with single-page-app fallback",
    )
    p.add_argument("--root", help="Directory to serve (env: DOGFINDER_ROOT)")
    p.add_argument("--host", help="Bind address (default 127.0.0.1; env: DOGFINDER_BIND)")
    p.add_argument("--port", type=int, help="Bind port (default 8080; env: DOGFINDER_PORT)")
    p.add_argument("--config", help="Path to a JSON config file (env: DOGFINDER_CONFIG)")
    p.add_argument("--log-level", help="Root log level, e.g. INFO or DEBUG")
    p.add_argument("--log-file", help="Also write logs to this file, rotated by size")
    return p


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    raw_config = args.config or os.environ.get(ENV_CONFIG)
    config_path = Path(raw_config).expanduser() if raw_config else None

    try:
        config = load_server_config(
            config_path,
            overrides={
                "root": args.root,
                "host": args.host,
                "port": args.port,
                "log_level": args.log_level,
                "log_file": args.log_file,
            },
        )
    except (OSError, ValueError) as exc:
        # pydantic.ValidationError is a ValueError.
        print(f"dogfinder-web: invalid configuration: {exc}", file=sys.stderr)
        return 2

    configure_logging(config.logging)

    # Requests are logged by the app middleware; skip uvicorn's access log.
    uvicorn.run(
        create_app(config),
        host=config.network.bind_host,
        port=config.network.port,
        access_log=False,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
