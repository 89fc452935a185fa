"""RefLine command line — draw a grid file to DXF, or serve the API.

Usage:
    refline draw grid.toml
    refline draw grid.toml -o plan.dxf --level dimensioned
    refline serve --port 8000
"""

from __future__ import annotations

import argparse
import logging
import socket
import sys
import threading
import time
import webbrowser
from pathlib import Path
from typing import Optional, Sequence

from refline.config import settings
from refline.core.composer.composer import AnnotationLevel, compose
from refline.core.errors import RefLineError, SinkError
from refline.core.parser.loader import load_grid

logger = logging.getLogger(__name__)


def find_free_port() -> int:
    """Find a free TCP port to avoid conflicts."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


def open_browser(host: str, port: int) -> None:
    """Wait for the server to start, then open the API docs."""
    for _ in range(50):
        try:
            with socket.create_connection((host, port), timeout=0.1):
                break
        except OSError:
            time.sleep(0.1)
    webbrowser.open(f"http://{host}:{port}/docs")


def draw(input_path: str, output_path: Optional[str], level: AnnotationLevel) -> int:
    output = output_path or str(Path(input_path).with_suffix(".dxf"))
    try:
        spec = load_grid(input_path)
        exporter = compose(spec, level)
        exporter.save(output)
    except SinkError as exc:
        logger.error("%s", exc)
        return 2
    except RefLineError as exc:
        logger.error("%s: %s", type(exc).__name__, exc)
        return 1
    return 0


def serve(host: str, port: Optional[int], browser: bool) -> int:
    import uvicorn

    port = port or find_free_port()
    logger.info("Starting %s on http://%s:%d", settings.app_name, host, port)

    if browser:
        threading.Thread(target=open_browser, args=(host, port), daemon=True).start()

    uvicorn.run("refline.main:app", host=host, port=port, log_level=settings.log_level.lower())
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="refline",
        description="Draw structural reference-line grids as DXF.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_draw = sub.add_parser("draw", help="Draw a TOML grid description to DXF")
    p_draw.add_argument("input", help="Grid description (.toml)")
    p_draw.add_argument("-o", "--output", help="Output .dxf path (default: input with .dxf suffix)")
    p_draw.add_argument(
        "--level",
        choices=[lvl.value for lvl in AnnotationLevel],
        default=settings.default_level,
        help="Annotation level (default: %(default)s)",
    )

    p_serve = sub.add_parser("serve", help="Run the HTTP API")
    p_serve.add_argument("--host", default="127.0.0.1")
    p_serve.add_argument("--port", type=int, default=None, help="Default: a free port")
    p_serve.add_argument("--no-browser", action="store_true", help="Do not open the API docs")

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )
    args = build_parser().parse_args(argv)

    if args.command == "draw":
        return draw(args.input, args.output, AnnotationLevel(args.level))
    return serve(args.host, args.port, not args.no_browser)


if __name__ == "__main__":
    sys.exit(main())
