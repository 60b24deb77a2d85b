from pathlib import Path
from typing import Any, Dict, Optional

import click
from rich.console import Console

from headup.app import Headup
from headup.constants import DEFAULT_RULE
from headup.errors import ConfigError, HeadupError
from headup.host import FileBuffer
from headup.models import UpdateResult, UpdateStatus
from headup.rules import ConfigRepository, HeadupConfig
from headup.rules.parser import serialize_config
from headup.tui import ConsoleNotifier, HeadupConsoleUI


def _repository_from_obj(obj: Dict[str, Any]) -> ConfigRepository:
    return ConfigRepository(obj.get("config_path"))


def _load_app(obj: Dict[str, Any], console: Console) -> Headup:
    repository = _repository_from_obj(obj)
    try:
        payload = repository.load()
    except HeadupError as exc:
        raise click.ClickException(str(exc))

    app = Headup(notifier=ConsoleNotifier(console))
    try:
        app.setup(payload)
    except ConfigError:
        raise click.exceptions.Exit(2)
    return app


def _update_file(app: Headup, path: Path, dry_run: bool) -> list[UpdateResult]:
    try:
        buffer = FileBuffer.open(path)
    except (OSError, UnicodeDecodeError) as exc:
        raise click.ClickException(f"Cannot read {path}: {exc}")

    results = app.force_update(buffer)
    if not dry_run:
        try:
            buffer.save()
        except OSError as exc:
            raise click.ClickException(f"Cannot write {path}: {exc}")
    return results


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Config file (default: $XDG_CONFIG_HOME/headup/config.yaml).",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path]) -> None:
    """Refresh header metadata lines in files."""
    ctx.obj = {"config_path": config_path}


@cli.command(help="Refresh metadata in the given files and save them.")
@click.argument(
    "files",
    nargs=-1,
    required=True,
    type=click.Path(path_type=Path, exists=True, dir_okay=False),
)
@click.option("--dry-run", is_flag=True, help="Show what would change without saving.")
@click.pass_obj
def update(obj: Dict[str, Any], files: tuple[Path, ...], dry_run: bool) -> None:
    console = Console()
    ui = HeadupConsoleUI(console)
    app = _load_app(obj, console)

    rows: list[tuple[str, UpdateResult]] = []
    for path in files:
        for result in _update_file(app, path, dry_run):
            rows.append((str(path), result))

    ui.render_results(rows, mode="dry-run" if dry_run else "update")
    if any(result.status == UpdateStatus.ERROR for _, result in rows):
        raise click.exceptions.Exit(1)


@cli.command(help="List registered content kinds.")
@click.pass_obj
def contents(obj: Dict[str, Any]) -> None:
    console = Console()
    app = _load_app(obj, console)
    HeadupConsoleUI(console).render_contents(app.registry.names())


@cli.group(help="Inspect and validate the configuration file.")
def config() -> None:
    pass


@config.command("show", help="Show the effective configuration.")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "yaml"], case_sensitive=False),
    default="table",
)
@click.pass_obj
def config_show(obj: Dict[str, Any], output_format: str) -> None:
    console = Console()
    ui = HeadupConsoleUI(console)
    app = _load_app(obj, console)
    effective: HeadupConfig = app.get_effective_config()
    if output_format.lower() == "yaml":
        ui.render_config_yaml(serialize_config(effective))
        return
    ui.render_config(effective, source=str(_repository_from_obj(obj).path))


@config.command("check", help="Validate the configuration file.")
@click.pass_obj
def config_check(obj: Dict[str, Any]) -> None:
    console = Console()
    app = _load_app(obj, console)
    HeadupConsoleUI(console).render_config_ok(
        app.get_effective_config(), source=str(_repository_from_obj(obj).path)
    )


@config.command("init", help="Write a starter configuration file.")
@click.option("--force", is_flag=True, help="Overwrite an existing file.")
@click.pass_obj
def config_init(obj: Dict[str, Any], force: bool) -> None:
    repository = _repository_from_obj(obj)
    if repository.exists() and not force:
        raise click.ClickException(
            f"Config already exists: {repository.path} (use --force to overwrite)"
        )
    repository.save({"enabled": True, "silent": True, "rules": [dict(DEFAULT_RULE)]})
    HeadupConsoleUI(Console()).render_config_saved(str(repository.path))


def main() -> int:
    try:
        cli(standalone_mode=False)
    except click.exceptions.Exit as exc:
        code = exc.exit_code
        return code if isinstance(code, int) else 1
    except click.ClickException as exc:
        exc.show()
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
