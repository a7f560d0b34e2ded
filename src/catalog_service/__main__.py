import argparse
import dataclasses
import logging
import sys
from typing import List, Optional

from .app import create_app
from .config import load_settings, parse_port


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="catalog-service",
        description="Serve the product catalog CRUD API backed by a JSON file",
    )
    parser.add_argument("--host", help="Bind address (env HOST, default 127.0.0.1)")
    parser.add_argument("--port", help="Listening port (env PORT, default 5000)")
    parser.add_argument(
        "--data-file",
        help="Path to the catalog JSON document (env CATALOG_DATA_FILE, default db.json)",
    )
    parser.add_argument(
        "--env",
        choices=["production", "development"],
        help="Runtime environment (env CATALOG_ENV, default production)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = load_settings()
        overrides = {}
        if args.port is not None:
            overrides["port"] = parse_port(args.port)
        if args.host:
            overrides["host"] = args.host
        if args.data_file:
            overrides["data_file"] = args.data_file
        if args.env:
            overrides["env"] = args.env
        settings = dataclasses.replace(settings, **overrides)
    except ValueError as exc:
        print(f"catalog-service: {exc}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=logging.DEBUG if settings.development else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = create_app(settings)
    logging.getLogger("catalog_service").info(
        "API server running at http://%s:%d (data file %s)",
        settings.host, settings.port, settings.data_file,
    )
    # threaded=True; the store serializes each load/save cycle
    app.run(host=settings.host, port=settings.port, threaded=True)
    return 0


if __name__ == "__main__":
    sys.exit(main())
