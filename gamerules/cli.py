"""gamerules CLI -- inspect and change game rules of a persisted server.

Extensions listed in the config file or passed with --extension are loaded
before any command runs, so their rules appear alongside the built-in ones.
"""

import difflib
import logging
import sys
from pathlib import Path
from typing import Annotated, Optional

import typer

from gamerules.config import GameRulesConfig, config_path, load_config
from gamerules.errors import CommandSyntaxError, ConfigError, ExtensionLoadError, NoSuchRuleError

# ---------------------------------------------------------------------------
# App and sub-apps
# ---------------------------------------------------------------------------

app = typer.Typer(
    name="gamerules",
    help="Typed game rules -- list, query and set built-in and extension rules.",
    no_args_is_help=True,
)

config_app = typer.Typer(
    name="config",
    help="Inspect gamerules configuration.",
    no_args_is_help=True,
)

app.add_typer(config_app, name="config")


# ---------------------------------------------------------------------------
# Global option types
# ---------------------------------------------------------------------------

JsonFlag = Annotated[bool, typer.Option("--json", help="Output as JSON.")]
PlainFlag = Annotated[bool, typer.Option("--plain", help="Output as plain text (no color).")]
VerboseFlag = Annotated[bool, typer.Option("--verbose", "-v", help="Verbose output.")]
QuietFlag = Annotated[bool, typer.Option("--quiet", "-q", help="Suppress non-essential output.")]
StateOption = Annotated[
    Optional[Path], typer.Option("--state", help="Rule state file (overrides config).")
]
ExtensionOption = Annotated[
    Optional[list[str]],
    typer.Option("--extension", "-e", help="Extension module to load (repeatable)."),
]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _get_format(json_flag: bool = False, plain_flag: bool = False) -> str:
    """Determine output format: json > plain > TTY auto-detect > rich."""
    if json_flag:
        return "json"
    if plain_flag:
        return "plain"
    if sys.stdout.isatty():
        return "rich"
    return "plain"


def _setup_logging(verbose: bool = False, quiet: bool = False, default: str = "WARNING") -> None:
    """Configure logging based on verbosity flags."""
    if quiet:
        logging.basicConfig(level=logging.ERROR)
    elif verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    else:
        logging.basicConfig(level=getattr(logging, default, logging.WARNING))


def _error_panel(message: str) -> None:
    """Print an error message, using Rich panel if available."""
    try:
        from rich.console import Console
        from rich.panel import Panel

        console = Console(stderr=True)
        console.print(Panel(message, title="Error", border_style="red"))
    except Exception:
        typer.echo(f"Error: {message}", err=True)


def _load_config() -> GameRulesConfig:
    try:
        return load_config()
    except ConfigError as exc:
        _error_panel(str(exc))
        raise typer.Exit(code=2)


def _fuzzy_rule_suggestion(name: str, known: list[str]) -> str:
    """Suggest close rule names using difflib."""
    matches = difflib.get_close_matches(name, known, n=3, cutoff=0.6)
    if matches:
        return f" Did you mean: {', '.join(matches)}?"
    return ""


def _boot(
    config: GameRulesConfig,
    state: Optional[Path],
    extensions: Optional[list[str]],
):
    """Load extensions, then build the server and restore its saved rules."""
    from gamerules.loader import load_extensions
    from gamerules.registry import default_registry
    from gamerules.state import RuleState
    from gamerules.world import Server

    load_extensions([*config.extensions, *(extensions or [])], default_registry)
    server = Server(config.server_name, default_registry)
    store = RuleState(state or config.state_path)
    store.load(server)
    return server, store


def _handle_rule_errors(exc: Exception) -> None:
    """Report user-facing rule errors and exit; re-raise anything else."""
    from gamerules.registry import default_registry

    if isinstance(exc, NoSuchRuleError):
        known = [key.name for key in default_registry.keys()]
        hint = _fuzzy_rule_suggestion(exc.name or "", known)
        _error_panel(f"Unknown rule: {exc}.{hint}")
        raise typer.Exit(code=1)
    if isinstance(exc, CommandSyntaxError):
        _error_panel(exc.format())
        raise typer.Exit(code=1)
    if isinstance(exc, ExtensionLoadError):
        _error_panel(str(exc))
        raise typer.Exit(code=2)
    raise exc


# ---------------------------------------------------------------------------
# Rule commands
# ---------------------------------------------------------------------------


@app.command(name="list")
def list_rules(
    state: StateOption = None,
    extension: ExtensionOption = None,
    json: JsonFlag = False,
    plain: PlainFlag = False,
    verbose: VerboseFlag = False,
    quiet: QuietFlag = False,
) -> None:
    """List every rule with its kind, current value and default."""
    config = _load_config()
    _setup_logging(verbose, quiet, config.log_level)
    try:
        from gamerules.output import get_formatter
        from gamerules.world import describe

        server, _ = _boot(config, state, extension)
        fmt = get_formatter(_get_format(json, plain))
        typer.echo(fmt.format_rules(describe(server)))
    except typer.Exit:
        raise
    except (NoSuchRuleError, CommandSyntaxError, ExtensionLoadError) as exc:
        _handle_rule_errors(exc)
    except Exception as exc:
        _error_panel(str(exc))
        raise typer.Exit(code=2)


@app.command()
def get(
    name: str = typer.Argument(help="Rule name (case-sensitive)"),
    state: StateOption = None,
    extension: ExtensionOption = None,
    json: JsonFlag = False,
    plain: PlainFlag = False,
    verbose: VerboseFlag = False,
    quiet: QuietFlag = False,
) -> None:
    """Query the current value of a rule."""
    config = _load_config()
    _setup_logging(verbose, quiet, config.log_level)
    try:
        from gamerules.commands import GameRuleCommand
        from gamerules.output import get_formatter

        server, _ = _boot(config, state, extension)
        outcome = GameRuleCommand(server.registry).query(server, name)
        fmt = get_formatter(_get_format(json, plain))
        typer.echo(fmt.format_outcome(outcome))
    except typer.Exit:
        raise
    except (NoSuchRuleError, CommandSyntaxError, ExtensionLoadError) as exc:
        _handle_rule_errors(exc)
    except Exception as exc:
        _error_panel(str(exc))
        raise typer.Exit(code=2)


@app.command(name="set")
def set_rule(
    name: str = typer.Argument(help="Rule name (case-sensitive)"),
    value: str = typer.Argument(help="New value, parsed by the rule's kind"),
    state: StateOption = None,
    extension: ExtensionOption = None,
    json: JsonFlag = False,
    plain: PlainFlag = False,
    verbose: VerboseFlag = False,
    quiet: QuietFlag = False,
) -> None:
    """Set a rule, notify its observers and save the new state."""
    config = _load_config()
    _setup_logging(verbose, quiet, config.log_level)
    try:
        from gamerules.commands import VALUE_ARGUMENT, GameRuleCommand, TextArgumentReader
        from gamerules.output import get_formatter

        server, store = _boot(config, state, extension)
        reader = TextArgumentReader({VALUE_ARGUMENT: value}, source=f"gamerule {name} {value}")
        outcome = GameRuleCommand(server.registry).set(server, name, reader)
        store.save(server)
        fmt = get_formatter(_get_format(json, plain))
        typer.echo(fmt.format_outcome(outcome))
    except typer.Exit:
        raise
    except (NoSuchRuleError, CommandSyntaxError, ExtensionLoadError) as exc:
        _handle_rule_errors(exc)
    except Exception as exc:
        _error_panel(str(exc))
        raise typer.Exit(code=2)


# ---------------------------------------------------------------------------
# Config commands
# ---------------------------------------------------------------------------


@config_app.command(name="show")
def config_show(
    json: JsonFlag = False,
) -> None:
    """Show the effective configuration."""
    import json as json_mod

    config = _load_config()
    path = config_path()
    if json:
        data = config.model_dump(mode="json")
        data["config_path"] = str(path)
        typer.echo(json_mod.dumps(data, indent=2))
        return

    source = str(path) if path.exists() else f"{path} (not found, using defaults)"
    typer.echo(f"Config file: {source}")
    typer.echo(f"State file:  {config.state_path}")
    typer.echo(f"Server name: {config.server_name}")
    typer.echo(f"Log level:   {config.log_level}")
    if config.extensions:
        typer.echo("Extensions:")
        for module in config.extensions:
            typer.echo(f"  {module}")
    else:
        typer.echo("Extensions:  none")


if __name__ == "__main__":
    app()
