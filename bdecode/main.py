import argparse
import json
import logging
import sys

import uvicorn

from . import fastapi_server
from .decoder import DEFAULT_MAX_DEPTH, decode_file
from .errors import DecodeError
from .render import render, render_error

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8000

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="bdecode", description="Decode and inspect bencoded data")
    parser.add_argument('-v', '--verbosity', help='increase output verbosity', action='store_true')
    commands = parser.add_subparsers(dest="command", required=True)

    decode = commands.add_parser("decode", help="print every value in a bencoded file as json")
    decode.add_argument("file", help="path to the bencoded file")
    decode.add_argument("--max-depth", type=int, default=DEFAULT_MAX_DEPTH, help="deepest allowed nesting")
    decode.add_argument("--indent", type=int, default=2, help="json indentation")

    serve = commands.add_parser("serve", help="run the http decode service")
    serve.add_argument("--host", default=DEFAULT_HOST)
    serve.add_argument("--port", type=int, default=DEFAULT_PORT)

    return parser.parse_args(argv)


def setup_logger(verbosity):
    logging_level = logging.DEBUG if verbosity else logging.INFO
    logging.basicConfig(level=logging_level)


def run_decode(args) -> int:
    """prints the json rendering of a file, returns the process exit status"""
    try:
        values = decode_file(args.file, args.max_depth)
    except OSError as e:
        print(f"cannot read {args.file}: {e}", file=sys.stderr)
        return 2
    except DecodeError as e:
        print(json.dumps(render_error(e)), file=sys.stderr)
        return 1

    print(json.dumps([render(value) for value in values], indent=args.indent))
    return 0


def run_server(args) -> int:
    logger.info("[serve] listening on %s:%d", args.host, args.port)
    uvicorn.run(
        fastapi_server.app,
        host=args.host,
        port=args.port,
        reload=False,
        lifespan="on"
    )
    return 0


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logger(args.verbosity)
    if args.command == "decode":
        return run_decode(args)
    return run_server(args)


if __name__ == "__main__":
    sys.exit(main())
