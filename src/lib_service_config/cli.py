"""Diagnostic CLI for ``lib_service_config`` built on ``lib_cli_exit_tools``.

Purpose
-------
Let operators see what a service will resolve at startup without starting it:
print the snapshot (optionally with provenance), check that resolution
succeeds, and scaffold example files.

Contents
--------
* :data:`CLICK_CONTEXT_SETTINGS` – shared Click settings ensuring ``-h`` works.
* :func:`cli` – root command wiring traceback handling into
  ``lib_cli_exit_tools``.
* :func:`cli_info` – prints distribution metadata.
* :func:`cli_show` – resolves and prints the snapshot as JSON.
* :func:`cli_check` – resolves and reports the failure kind, if any.
* :func:`cli_generate_examples` – writes example ``etc/`` files.
* :func:`main` – entry point used by ``console_scripts`` registration.

System Role
-----------
Outermost layer. It only calls the composition root; the library itself never
exits the process.
"""

from __future__ import annotations

import json
import sys
from importlib import metadata
from pathlib import Path
from typing import Any, Final, Optional, Sequence

import lib_cli_exit_tools
import rich_click as click

from .core import resolve_service_config
from .examples import generate_examples as _generate_examples

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_TRACEBACK_SUMMARY_LIMIT: Final[int] = 500
_TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000

#: Dotted keys masked by ``show`` unless ``--reveal`` is passed.
SECRET_KEYS: Final[tuple[str, ...]] = ("database.password", "auth.private_key", "mail_service.api_key")
_MASK: Final[str] = "********"

_SEARCH_DIR_OPTION = click.option(
    "--search-dir",
    type=click.Path(path_type=Path, file_okay=False, dir_okay=True),
    default=None,
    help="Directory probed for service.* and localhost_service.* (defaults to ./etc)",
)


def _resolve_version() -> str:
    """Return the installed package version, or ``"0.0.0"`` when not installed."""

    try:
        return metadata.version("lib_service_config")
    except metadata.PackageNotFoundError:
        return "0.0.0"


@click.group(
    help="Layered service configuration resolver",
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=False,
)
@click.version_option(
    version=_resolve_version(),
    prog_name="lib_service_config",
    message="lib_service_config version %(version)s",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool) -> None:
    """Root command storing the traceback preference for all subcommands.

    Side Effects
        Mutates ``lib_cli_exit_tools.config.traceback`` and
        ``lib_cli_exit_tools.config.traceback_force_color``.
    """

    ctx.ensure_object(dict)
    ctx.obj["traceback"] = traceback
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print basic distribution metadata so users can confirm installation."""

    try:
        meta = metadata.metadata("lib_service_config")
    except metadata.PackageNotFoundError:
        click.echo("lib_service_config (metadata unavailable)")
        return
    click.echo(f"Info for {meta.get('Name', 'lib_service_config')}:")
    click.echo(f"  Version         : {meta.get('Version', _resolve_version())}")
    click.echo(f"  Requires-Python : {meta.get('Requires-Python', '>=3.10')}")
    summary = meta.get("Summary")
    if summary:
        click.echo(f"  Summary         : {summary}")


@cli.command("show", context_settings=CLICK_CONTEXT_SETTINGS)
@_SEARCH_DIR_OPTION
@click.option("--indent", type=int, default=None, help="Pretty-print JSON output with the provided indent size")
@click.option(
    "--provenance/--no-provenance",
    default=False,
    help="Include the tier and file that supplied each field",
)
@click.option("--reveal/--no-reveal", default=False, help="Print secrets instead of masking them")
def cli_show(search_dir: Optional[Path], indent: Optional[int], provenance: bool, reveal: bool) -> None:
    """Resolve the configuration and print it as JSON.

    Fails with the same error a starting service would hit when a file cannot
    be decoded or the HTTP port is invalid.
    """

    config = resolve_service_config(search_dir=search_dir).unwrap()
    data = config.as_dict()
    if not reveal:
        _mask_secrets(data)
    if not provenance:
        click.echo(json.dumps(data, indent=indent, separators=(",", ":"), ensure_ascii=False))
        return
    meta = {key: config.origin(key) for key in _dotted_keys(data)}
    payload = {"config": data, "provenance": {key: value for key, value in meta.items() if value is not None}}
    click.echo(json.dumps(payload, indent=indent, separators=(",", ":"), ensure_ascii=False))


@cli.command("check", context_settings=CLICK_CONTEXT_SETTINGS)
@_SEARCH_DIR_OPTION
@click.pass_context
def cli_check(ctx: click.Context, search_dir: Optional[Path]) -> None:
    """Resolve the configuration and exit non-zero when it is unusable."""

    result = resolve_service_config(search_dir=search_dir)
    if result.is_ok:
        click.echo("ok")
        return
    kind = result.kind.value if result.kind is not None else "error"
    click.echo(f"{kind}: {result.detail}", err=True)
    ctx.exit(1)


@cli.command("generate-examples", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--destination",
    type=click.Path(path_type=Path, file_okay=False, dir_okay=True, resolve_path=True),
    required=True,
    help="Directory that will receive etc/service.yaml and etc/localhost_service.yaml",
)
@click.option("--service-name", default="service", show_default=True, help="Name used inside the examples")
@click.option(
    "--force/--no-force",
    default=False,
    help="Overwrite existing example files if set",
    show_default=True,
)
def cli_generate_examples(destination: Path, service_name: str, force: bool) -> None:
    """Generate example configuration files under *destination*."""

    created = _generate_examples(destination, service_name=service_name, force=force)
    click.echo(json.dumps([str(path) for path in created], indent=2))


def _mask_secrets(data: dict[str, Any]) -> None:
    """Replace non-empty secret fields in *data* with a fixed mask."""

    for dotted in SECRET_KEYS:
        section, key = dotted.split(".")
        if data[section][key]:
            data[section][key] = _MASK


def _dotted_keys(data: dict[str, Any]) -> list[str]:
    """Return every leaf key of *data* in dotted form."""

    keys: list[str] = []
    for name, value in data.items():
        if isinstance(value, dict):
            keys.extend(f"{name}.{field}" for field in value)
        else:
            keys.append(name)
    return keys


def main(argv: Optional[Sequence[str]] = None, *, restore_traceback: bool = True) -> int:
    """Execute the CLI with shared exit handling and return the exit code."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        try:
            return lib_cli_exit_tools.run_cli(
                cli,
                argv=list(argv) if argv is not None else None,
                prog_name="lib_service_config",
            )
        except BaseException as exc:  # noqa: BLE001 - funnel through shared printers
            lib_cli_exit_tools.print_exception_message(
                trace_back=lib_cli_exit_tools.config.traceback,
                length_limit=(
                    _TRACEBACK_VERBOSE_LIMIT if lib_cli_exit_tools.config.traceback else _TRACEBACK_SUMMARY_LIMIT
                ),
            )
            return lib_cli_exit_tools.get_system_exit_code(exc)
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


if __name__ == "__main__":  # pragma: no cover - exercised via console entry point
    raise SystemExit(main(sys.argv[1:]))
