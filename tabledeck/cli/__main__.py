from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from tabledeck.config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_export_options
from tabledeck.errors import FormatError, RenderError, ValidationError
from tabledeck.logging.error_log import ErrorLogBuffer
from tabledeck.logging.init import log_summary, set_debug, setup_logging
from tabledeck.models.export_options import ExportOptions
from tabledeck.render.pptx_renderer import PptxDeckRenderer
from tabledeck.services.orchestrator import ExportOrchestrator
from tabledeck.services.progress import ExportProgress
from tabledeck.services.summary import render_summary_line

"""CLI entrypoint.

    python -m tabledeck.cli DATA_FILE [--config PATH] [--preview] [--output-dir DIR]
                                      [--columns a,b,c] [--exclude a,b]
                                      [--inspect-data] [--debug]

Flow: load .env -> load options -> load data file -> apply column selection ->
export (or print the preview table) -> SUMMARY line.
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_RENDER_FAILURE = 2

ENV_CONFIG = "TABLEDECK_CONFIG"
ENV_OUTPUT_DIR = "TABLEDECK_OUTPUT_DIR"


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env so TABLEDECK_* defaults are visible to argument resolution."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _split_names(value: str | None) -> list[str]:
    if not value:
        return []
    return [name.strip() for name in value.split(",") if name.strip()]


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="CSV/JSON -> paginated PowerPoint table exporter")
    p.add_argument("data_file", type=Path, help="Input .csv or .json file")
    p.add_argument("--config", type=Path, default=None, help="Export options YAML")
    p.add_argument("--preview", action="store_true", help="Export only the first preview pages")
    p.add_argument("--output-dir", type=Path, default=None, help="Directory for .pptx output")
    p.add_argument("--columns", default=None, help="Comma-separated columns to include, in order")
    p.add_argument("--exclude", default=None, help="Comma-separated columns to leave out")
    p.add_argument("--inspect-data", action="store_true", help="Print the preview table then exit")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    return p.parse_args(argv)


def _resolve_options(args: argparse.Namespace, logger) -> ExportOptions:
    explicit = args.config or (Path(os.environ[ENV_CONFIG]) if os.getenv(ENV_CONFIG) else None)
    if explicit is not None:
        return load_export_options(explicit)
    if DEFAULT_CONFIG_PATH.exists():
        return load_export_options(DEFAULT_CONFIG_PATH)
    logger.info(f"no config at {DEFAULT_CONFIG_PATH}, using default export options")
    return ExportOptions()


def _apply_column_selection(orchestrator: ExportOrchestrator, args: argparse.Namespace) -> None:
    model = orchestrator.columns
    selected = _split_names(args.columns)
    if selected:
        for name in selected:
            model.get(name)  # unknown names fail before any edit
        model.set_all_included(False)
        for name in selected:
            model.set_included(name, True)
            model.reorder(name, None)
    for name in _split_names(args.exclude):
        model.set_included(name, False)


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # only read sys.argv when no explicit list is given (tests pass [])
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)

    if args.debug:
        set_debug(logger)
        logger.debug("debug mode enabled")

    try:
        options = _resolve_options(args, logger)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    output_dir = args.output_dir or Path(os.getenv(ENV_OUTPUT_DIR) or ".")
    error_log = ErrorLogBuffer()

    with ExportProgress() as progress:
        progress.subscribe(
            lambda u: logger.debug(f"progress {u.percent}% {u.label}{' (error)' if u.error else ''}")
        )
        orchestrator = ExportOrchestrator(PptxDeckRenderer(), progress=progress, error_log=error_log)
        try:
            return _run(orchestrator, args, options, output_dir, logger)
        finally:
            try:
                path = error_log.flush()
                if path is not None:
                    logger.info(f"error log written to {path}")
            except OSError as e:
                logger.warning(f"failed to write error log: {e}")


def _run(
    orchestrator: ExportOrchestrator,
    args: argparse.Namespace,
    options: ExportOptions,
    output_dir: Path,
    logger,
) -> int:
    try:
        orchestrator.load_path(args.data_file)
        _apply_column_selection(orchestrator, args)
    except (FormatError, ValidationError) as e:
        logger.error(f"load: {e}")
        return EXIT_FATAL

    if args.inspect_data:
        frame = orchestrator.preview_frame()
        print(frame.to_string(index=False) if not frame.empty else "(no rows or no columns selected)")
        return EXIT_SUCCESS

    mode = "preview" if args.preview else "full"
    logger.info(f"Generating {mode} export from {args.data_file.name} into {output_dir}")
    try:
        result = orchestrator.export_deck(options, preview_only=args.preview, output_dir=output_dir)
    except ValidationError as e:
        logger.error(f"export: {e}")
        return EXIT_FATAL
    except RenderError as e:
        logger.error(f"render: {e}")
        if e.rendered_files:
            logger.warning(
                "partial output left on disk: " + ", ".join(str(p) for p in e.rendered_files)
            )
        return EXIT_RENDER_FAILURE

    if result.file_count > 1:
        logger.info(f"Split export written as {result.file_count} files.")
    summary_line = render_summary_line(result)
    log_summary(summary_line[len("SUMMARY "):])
    return EXIT_SUCCESS


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
