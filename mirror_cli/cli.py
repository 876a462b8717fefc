from __future__ import annotations

import sys

import click

from . import __version__
from .cli_shared import (
    MIRROR_CLI_CONTRACTS,
    MIRROR_CLI_NETWORK,
    EXIT_OP_ERROR,
    EXIT_USAGE_ERROR,
    GlobalOpts,
    OpError,
    UsageError,
    _bootstrap_env,
    _configure_logging,
    _rich_error,
)
from .commands.contracts import default_registry
from .context import DEFAULT_NETWORK, NETWORKS
from .contract_menu import EXEC, QUERY, CommandRegistry

PROG_NAME = "mirrorcli"


def _version_callback(ctx: click.Context, param: click.Parameter, value: bool) -> None:
    if not value or ctx.resilient_parsing:
        return
    click.echo(f"{PROG_NAME} {__version__}")
    ctx.exit(0)


@click.pass_context
def _root_callback(ctx: click.Context, network: str, contracts: str, plain_json: bool, verbose: bool) -> None:
    _configure_logging(verbose=verbose)
    ctx.obj = {
        "g": GlobalOpts(
            network=str(network or DEFAULT_NETWORK).strip(),
            contracts_path=str(contracts or "").strip(),
            pretty=not plain_json,
            verbose=verbose,
        )
    }


def _root_params() -> list[click.Parameter]:
    return [
        click.Option(
            ["--network"],
            default=DEFAULT_NETWORK,
            envvar=MIRROR_CLI_NETWORK,
            show_default=True,
            help=f"Network preset ({', '.join(sorted(NETWORKS))})",
        ),
        click.Option(
            ["--contracts"],
            default="",
            envvar=MIRROR_CLI_CONTRACTS,
            help="Contract address book JSON (default: ~/.mirrorcli/contracts-<network>.json)",
        ),
        click.Option(["--plain-json"], is_flag=True, help="Emit compact JSON output"),
        click.Option(["--verbose"], is_flag=True, help="Log LCD requests and signer calls to stderr"),
        click.Option(
            ["--version"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=_version_callback,
            help="Show the version and exit.",
        ),
    ]


def build_cli(registry: CommandRegistry) -> click.Group:
    """Attach every registered menu under ``exec``/``query`` and freeze the registry."""
    registry.freeze()
    root = click.Group(
        name=PROG_NAME,
        help="Command line for the Mirror Protocol contracts.",
        params=_root_params(),
        callback=_root_callback,
        no_args_is_help=True,
    )
    groups = {
        EXEC: click.Group(name=EXEC, help="Execute contract functions (signed transactions).", no_args_is_help=True),
        QUERY: click.Group(name=QUERY, help="Query contract state (read-only).", no_args_is_help=True),
    }
    for kind, group in groups.items():
        for menu in registry.menus_of(kind):
            group.add_command(menu.to_click())
        root.add_command(group)
    return root


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    _bootstrap_env()
    cli = build_cli(default_registry())
    try:
        result = cli.main(args=argv, prog_name=PROG_NAME, standalone_mode=False)
        if result is None:
            return 0
        return int(result)
    except click.exceptions.Exit as e:
        return int(e.exit_code)
    except click.exceptions.Abort:
        _rich_error("aborted")
        return EXIT_OP_ERROR
    except click.ClickException as e:
        _rich_error(e.format_message())
        return int(e.exit_code)
    except UsageError as e:
        _rich_error(str(e))
        return EXIT_USAGE_ERROR
    except OpError as e:
        _rich_error(str(e))
        return EXIT_OP_ERROR


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
