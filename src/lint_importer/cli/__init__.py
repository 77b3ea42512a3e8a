"""Command-line interface package for the lint report importer."""

from .app import (
    ImportReport,
    build_parser,
    configure_logging,
    create_service,
    main,
    render_table,
    run,
)

__all__ = [
    "ImportReport",
    "build_parser",
    "configure_logging",
    "create_service",
    "main",
    "render_table",
    "run",
]
