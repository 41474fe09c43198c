"""TENANTCAT CLI entry point.

Defines the top-level ``tenantcat`` command (via Click-Extra) and registers its
command groups:

- ``tenantcat db``: forward-only catalog schema management.
- ``tenantcat tenants``: register tenants, locate their databases.
- ``tenantcat shards``: list tenant databases.
- ``tenantcat names``: check names against the naming rules.

Examples
    $ export TENANTCAT_CATALOG_URL=sqlite:///catalog.db
    $ tenantcat tenants register "Fabrikam Jazz Club" -s tcp:shard1 -d fabrikamjazzclub
    $ tenantcat tenants locate "Fabrikam Jazz Club"
"""

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import click
import click_extra as clickx
from platformdirs import user_log_dir

from tenantcat import __version__
from tenantcat.interfaces.redactor import RedactorMode
from tenantcat.logging import config_console_handler, config_flight_recorder, log_startup

from .db import db as db_group
from .helpers.log_level_parser import parse_log_level
from .names import names as names_group
from .tenants import shards as shards_group
from .tenants import tenants as tenants_group

if TYPE_CHECKING:
    from logging import Handler

logger = logging.getLogger(__name__)


HELP = """TENANTCAT command-line interface.

    TENANTCAT keeps the catalog of a multi-tenant SaaS deployment: which
    database (shard) holds each tenant's data, keyed by a stable 32-bit key
    derived from the tenant's name.
    """


@clickx.extra_group(
    version=__version__,
    help=HELP,
    params=[
        clickx.ColorOption(show_envvar=True),
        clickx.TimerOption(show_envvar=True),
        clickx.ExtraVersionOption(),
    ],
)
@click.option(
    "--verbose",
    "-v",
    "verbose_count",
    count=True,
    help="Increase the default WARNING verbosity by one level per repetition.",
    default=0,
)
@click.option(
    "--quiet",
    "-q",
    "quiet_count",
    count=True,
    help="Decrease the default WARNING verbosity by one level per repetition.",
    default=0,
)
@click.option(
    "--debug/--no-debug",
    is_flag=True,
    help="Enable debug mode (extra developer diagnostics beyond -vvv).",
    default=False,
)
@click.option(
    "--log-path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to the flight recorder log file.",
    default=Path(user_log_dir("tenantcat", appauthor=False)) / "latest.log",
    envvar="TENANTCAT_LOG_PATH",
    show_default=True,
    show_envvar=True,
)
@click.option(
    "--flight-recorder-capacity",
    type=int,
    default=2000,
    hidden=True,
    envvar="TENANTCAT_FLIGHT_RECORDER_CAPACITY",
    show_envvar=True,
    help="Capacity of the flight recorder (in number of log records).",
)
@click.option(
    "--flight-recorder/--no-flight-recorder",
    "flight_recorder",
    is_flag=True,
    help=(
        "Keep the last N log records at DEBUG granularity (unaffected by -v/-q) "
        "and write them to --log-path when a WARNING/ERROR occurs, or on exit "
        "if --force-flush is set."
    ),
    default=True,
    show_envvar=True,
)
@click.option(
    "--force-flush/--no-force-flush",
    "force_flush_flight_recorder",
    is_flag=True,
    help="Write the flight recorder buffer to --log-path on exit.",
    default=False,
    show_default=True,
    show_envvar=True,
)
@click.option(
    "-L",
    "--logger-level",
    "logger_levels",
    multiple=True,
    callback=parse_log_level,
    help=(
        "Set the MINIMUM LEVEL of specific LOGGERS (NAME=LEVEL). Applies to "
        "console and flight recorder alike. Repeatable (e.g. -L sqlalchemy=INFO "
        "-L alembic=WARNING) or via TENANTCAT_LOGGER_LEVELS (comma/space list)."
    ),
    default=("sqlalchemy=WARNING", "alembic=WARNING"),
    show_default=True,
    show_envvar=True,
)
@click.option(
    "--redactor-mode",
    "redactor_mode",
    type=click.Choice([mode.value for mode in RedactorMode], case_sensitive=False),
    help=(
        "How catalog URLs are redacted in logs and messages. 'lenient' hides "
        "passwords and tokens; 'strict' also hides usernames."
    ),
    default=RedactorMode.LENIENT.value,
    show_envvar=True,
    show_default=True,
)
@clickx.pass_context
def tenantcat(  # pylint: disable=too-many-arguments, too-many-locals, too-many-positional-arguments
    ctx: click.Context,
    verbose_count: int,
    quiet_count: int,
    debug: bool,
    log_path: Path,
    flight_recorder_capacity: int,
    flight_recorder: bool,
    force_flush_flight_recorder: bool,
    logger_levels: dict[str, int],
    redactor_mode: str,
) -> None:
    """TENANTCAT command-line interface."""

    # 0) compute effective verbosity
    level = logging.WARNING - (10 * verbose_count) + (10 * quiet_count)
    level = max(logging.DEBUG, min(logging.CRITICAL, level))

    handlers: list[Handler] = []

    # 1) console
    use_color = ctx.color is not False
    handlers.append(
        config_console_handler(level=level, debug_mode=debug, color=use_color)
    )

    # 2) flight recorder
    if flight_recorder:
        handlers.append(
            config_flight_recorder(
                path=log_path,
                capacity=flight_recorder_capacity,
                flush_on_close=force_flush_flight_recorder,
            )
        )

    # 3) root logger captures everything; handlers filter
    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)

    # 4) third-party levels
    for name, lvl in logger_levels.items():
        logging.getLogger(name).setLevel(lvl)

    log_startup(
        logger,
        app_version=__version__,
        level=level,
        handlers=handlers,
        log_path=log_path,
        flight_recorder=flight_recorder,
        flight_capacity=flight_recorder_capacity if flight_recorder else None,
        force_flush_fr=force_flush_flight_recorder,
        logger_levels=logger_levels,
        redactor_mode=redactor_mode,
    )

    ctx.ensure_object(dict)["redactor_mode"] = RedactorMode(redactor_mode.lower())

    ctx.call_on_close(logging.shutdown)


tenantcat.add_command(db_group)
tenantcat.add_command(tenants_group)
tenantcat.add_command(shards_group)
tenantcat.add_command(names_group)
