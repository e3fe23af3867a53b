from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from mobiledoc_html import __version__
from mobiledoc_html.config import build_renderer, find_config_file, load_config
from mobiledoc_html.diagnostics import format_error_with_hint
from mobiledoc_html.errors import (
    CardNotFoundError,
    InvalidCardRenderError,
    MalformedMobiledocError,
    MobiledocError,
)
from mobiledoc_html.renderer import Renderer

EXIT_OK = 0
EXIT_INPUT_ERROR = 2
EXIT_RENDER_ERROR = 3

STDIN = "-"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="mobiledoc-html")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level for diagnostics on stderr.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    render_p = subparsers.add_parser("render", help="Render a Mobiledoc JSON file to HTML.")
    render_p.add_argument("input", help="Path to a Mobiledoc JSON document, or - for stdin.")
    render_p.add_argument(
        "-o",
        "--output",
        type=str,
        default=None,
        help="Write HTML to this path (defaults to stdout).",
    )
    render_p.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to mobiledoc-html.toml (defaults to searching upward from cwd).",
    )
    render_p.add_argument(
        "--no-config",
        action="store_true",
        help="Ignore any mobiledoc-html.toml and render with the built-in cards only.",
    )
    render_p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print a JSON result object instead of raw HTML.",
    )
    render_p.add_argument(
        "--watch",
        action="store_true",
        help="Re-render whenever the input or config file changes.",
    )

    return parser


def parse_args(argv: list[str]) -> argparse.Namespace:
    return _build_parser().parse_args(argv)


def _is_json_mode(args: argparse.Namespace) -> bool:
    return bool(getattr(args, "json_output", False))


def _eprint(msg: str) -> None:
    print(msg, file=sys.stderr)


def _config_path(args: argparse.Namespace) -> Path | None:
    if args.no_config:
        return None
    if args.config:
        return Path(args.config).resolve()
    return find_config_file(Path.cwd())


def _load_renderer(args: argparse.Namespace) -> Renderer:
    config_path = _config_path(args)
    if config_path is None:
        return Renderer()
    return build_renderer(load_config(config_path))


def _read_input(source: str) -> object:
    try:
        if source == STDIN:
            text = sys.stdin.read()
        else:
            text = Path(source).read_bytes().decode("utf-8")
    except UnicodeDecodeError as e:
        raise MalformedMobiledocError(f"Input is not valid UTF-8: {source}") from e
    return json.loads(text)


def _write_output(html: str, output: str | None) -> None:
    if output is None:
        sys.stdout.write(html + "\n")
        return
    Path(output).write_text(html, encoding="utf-8")


def _report(args: argparse.Namespace, *, html: str | None, error: BaseException | None) -> None:
    if _is_json_mode(args):
        payload: dict[str, object] = {"command": "render", "ok": error is None}
        if error is None:
            if args.output is None:
                payload["html"] = html
            else:
                payload["output"] = args.output
        else:
            payload["error"] = (str(error) or repr(error)).strip()
            payload["error_type"] = type(error).__name__
        print(json.dumps(payload))
        return

    if error is not None:
        _eprint(format_error_with_hint(error))


def cmd_render(args: argparse.Namespace) -> int:
    try:
        renderer = _load_renderer(args)
        result = renderer.render(_read_input(args.input))
    except (CardNotFoundError, InvalidCardRenderError) as e:
        _report(args, html=None, error=e)
        return EXIT_RENDER_ERROR
    except (MobiledocError, json.JSONDecodeError, OSError) as e:
        _report(args, html=None, error=e)
        return EXIT_INPUT_ERROR

    try:
        if not _is_json_mode(args) or args.output is not None:
            _write_output(result.html, args.output)
    except OSError as e:
        _report(args, html=None, error=e)
        return EXIT_INPUT_ERROR
    finally:
        result.teardown()

    if _is_json_mode(args):
        _report(args, html=result.html, error=None)
    return EXIT_OK


def cmd_watch(args: argparse.Namespace) -> int:
    from mobiledoc_html.watcher import (
        build_cycle_runner,
        import_watchfiles,
        run_watch_loop,
    )

    if args.input == STDIN:
        _eprint("error: --watch needs an input file, not stdin")
        return EXIT_INPUT_ERROR

    try:
        watchfiles = import_watchfiles()
    except ImportError as e:
        _eprint(f"error: {e}")
        return EXIT_INPUT_ERROR

    watched = [Path(args.input).resolve()]
    config_path = _config_path(args)
    if config_path is not None:
        watched.append(config_path)

    def on_error(exc: BaseException) -> None:
        _eprint(f"[watch] error: {type(exc).__name__}: {exc}")

    # Watch parent directories; editors often replace files instead of writing in place.
    watch_dirs = sorted({p.parent for p in watched})

    cmd_render(args)
    try:
        asyncio.run(
            run_watch_loop(
                changes_iter=watchfiles.awatch(*watch_dirs, debounce=200),
                run_cycle=build_cycle_runner(lambda: cmd_render(args)),
                on_event=_eprint,
                on_error=on_error,
                watched=watched,
            )
        )
    except KeyboardInterrupt:
        pass
    return EXIT_OK


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )


def main(argv: list[str] | None = None) -> int:
    try:
        args = parse_args(list(sys.argv[1:] if argv is None else argv))
    except SystemExit as e:
        # argparse uses SystemExit for --help/--version and parse errors.
        code = e.code
        return int(code) if isinstance(code, int) else EXIT_INPUT_ERROR

    _configure_logging(args.log_level)

    if args.command == "render":
        if args.watch:
            return cmd_watch(args)
        return cmd_render(args)

    return EXIT_INPUT_ERROR


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
