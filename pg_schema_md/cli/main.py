"""Command line entry point: read the catalog and write the markdown file."""

from __future__ import annotations

from dataclasses import replace
from typing import Optional

import click
from click.core import ParameterSource

from ..catalog import CatalogReadError, Database, build_document
from ..config import DEFAULT_CONFIG_PATH, Config, ConfigError, load_config
from ..datasources.postgresql import PostgreSQLDataSource
from ..render import RenderError, render
from ..utils.logging import get_contextual_logger, setup_logging


def generate(config: Config, out_file: str) -> Database:
    """Connect, read the whole catalog, then write it to ``out_file``.

    The output file is only created once the document has been built, so a
    failed catalog read leaves no file behind.

    Raises:
        ConnectionError: If the pool cannot be set up
        CatalogReadError: If any catalog query fails
        RenderError: If the file cannot be written
    """
    connection = config.connection
    datasource = PostgreSQLDataSource(
        connection.database or "postgresql", connection.to_datasource_config()
    )
    with datasource:
        document = build_document(
            datasource.query,
            config.filters.skip_schema,
            config.filters.skip_tables,
            connection.database,
        )
    write_document(document, out_file)
    return document


def write_document(document: Database, out_file: str) -> None:
    """Render ``document`` into ``out_file`` as UTF-8 with ``\\n`` endings."""
    try:
        with open(out_file, "w", encoding="utf-8", newline="\n") as fout:
            render(document, fout)
    except OSError as e:
        raise RenderError(e) from e


def _apply_flags(config: Config, **flags: Optional[str]) -> Config:
    """Override connection settings from the config file with CLI flags."""
    overrides = {key: value for key, value in flags.items() if value}
    if not overrides:
        return config
    return replace(config, connection=replace(config.connection, **overrides))


def _no_arguments(ctx: click.Context) -> bool:
    for name in ctx.params:
        if ctx.get_parameter_source(name) != ParameterSource.DEFAULT:
            return False
    return True


@click.command()
@click.option("-host", "--host", default="", help="database host")
@click.option("-port", "--port", default="", help="database port")
@click.option("-database", "--database", default="", help="database name")
@click.option("-user", "--user", default="", help="database user")
@click.option("-password", "--password", default="", help="database password")
@click.option(
    "-out-file",
    "--out-file",
    "out_file",
    default="out.md",
    show_default=True,
    help="file to output markdown",
)
@click.option(
    "-config",
    "--config",
    "config_path",
    default=DEFAULT_CONFIG_PATH,
    show_default=True,
    help="Path to the JSON/YAML file with skip_tables and skip_schema.",
)
@click.option(
    "--log-level",
    default="INFO",
    show_default=True,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
)
@click.option("--structured-logs", is_flag=True, help="Emit JSON log lines.")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, writable=True),
    help="Also write log lines to this file.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    host: str,
    port: str,
    database: str,
    user: str,
    password: str,
    out_file: str,
    config_path: str,
    log_level: str,
    structured_logs: bool,
    log_file: Optional[str],
) -> None:
    """Write a markdown description of a PostgreSQL database schema."""
    if _no_arguments(ctx):
        click.echo(ctx.get_help())
        return

    setup_logging(log_level, structured=structured_logs, log_file=log_file)
    log = get_contextual_logger(__name__, {"database": database, "out_file": out_file})

    try:
        config = load_config(config_path)
    except ConfigError as e:
        log.error(f"cannot load config: {e}", extra={"stage": "config"})
        ctx.exit(1)

    config = _apply_flags(
        config,
        host=host,
        port=port,
        database=database,
        user=user,
        password=password,
    )

    try:
        document = generate(config, out_file)
    except ConnectionError as e:
        log.error(
            f"cannot connect to the database: {e}", extra={"stage": "connection"}
        )
        ctx.exit(1)
    except CatalogReadError as e:
        log.error(
            str(e),
            extra={"stage": e.stage, "target": e.target, "error": str(e.cause)},
        )
        ctx.exit(1)
    except RenderError as e:
        log.error(
            f"cannot build markdown file: {e}",
            extra={"stage": "render", "error": str(e.cause)},
        )
        ctx.exit(1)

    log.info(f"Wrote {len(document.schemas)} schemas to {out_file}")


if __name__ == "__main__":
    cli()
