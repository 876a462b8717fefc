"""Exec/query menu construction and command dispatch.

Contract modules declare sub-commands against a ``CommandMenu``; each
declaration freezes into a ``CommandSpec``. When the CLI runs, click parses
argv, ``CommandSpec.parse`` turns the raw strings into an immutable
``ParsedOptions`` record, and the handler receives it together with the
``MenuInvocation``. Handlers hand a callback to ``handle_exec_command`` or
``handle_query_command``, which own context resolution, output and the exit
status.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Iterable, Mapping

import click

from .cli_shared import (
    GlobalOpts,
    MirrorCliError,
    OpError,
    PreconditionError,
    _exit_code_for,
    _print_result,
    _rich_error,
)
from .context import (
    DEFAULT_NETWORK,
    MenuOptions,
    resolve_exec_context,
    resolve_query_context,
)
from .lcd import BROADCAST_MODES, LCDClient
from .parse_input import parser_for
from .sdk import ContractCall, Mirror

log = logging.getLogger(__name__)

EXEC = "exec"
QUERY = "query"

_USAGE_TOKEN_RE = re.compile(r"^(<([a-z0-9][a-z0-9-]*)>|\[([a-z0-9][a-z0-9-]*)\])$")
_OPTION_FLAGS_RE = re.compile(r"^(--[a-z0-9][a-z0-9-]*)(?:\s+<([A-Za-z0-9_|]+)>)?$")
_ARG_TYPE_RE = re.compile(r"^\((\w+)\)\s*")


def _py_name(name: str) -> str:
    return name.lstrip("-").replace("-", "_")


@dataclass(frozen=True)
class ArgumentSpec:
    name: str
    required: bool = True
    help: str = ""
    type_name: str = "string"

    @property
    def py_name(self) -> str:
        return _py_name(self.name)


@dataclass(frozen=True)
class OptionSpec:
    flag: str
    type_name: str | None
    help: str = ""
    required: bool = False

    @property
    def py_name(self) -> str:
        return _py_name(self.flag)

    @property
    def is_flag(self) -> bool:
        return self.type_name is None


class ParsedOptions:
    """Typed argument and option values for one invocation; read-only."""

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[str, Any]) -> None:
        object.__setattr__(self, "_values", MappingProxyType(dict(values)))

    def __getattr__(self, name: str) -> Any:
        try:
            return self._values[name]
        except KeyError:
            raise AttributeError(name) from None

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("ParsedOptions is read-only")

    def __getitem__(self, name: str) -> Any:
        return self._values[name]

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def get(self, name: str, default: Any = None) -> Any:
        return self._values.get(name, default)

    def as_dict(self) -> dict[str, Any]:
        return dict(self._values)

    def __repr__(self) -> str:
        return f"ParsedOptions({dict(self._values)!r})"


Handler = Callable[["MenuInvocation", ParsedOptions], None]


@dataclass(frozen=True)
class CommandSpec:
    name: str
    description: str
    arguments: tuple[ArgumentSpec, ...]
    options: tuple[OptionSpec, ...]
    paired: tuple[tuple[str, str], ...]
    handler: Handler

    def parse(self, raw: Mapping[str, Any]) -> ParsedOptions:
        values: dict[str, Any] = {}
        for arg in self.arguments:
            values[arg.py_name] = _convert(arg.type_name, raw.get(arg.py_name))
        for opt in self.options:
            value = raw.get(opt.py_name)
            values[opt.py_name] = bool(value) if opt.is_flag else _convert(opt.type_name or "string", value)
        for first, second in self.paired:
            has_first = values.get(_py_name(first)) is not None
            has_second = values.get(_py_name(second)) is not None
            if has_first != has_second:
                raise PreconditionError(f"both {first} and {second} must be supplied if either is")
        return ParsedOptions(values)

    def help_text(self) -> str:
        text = self.description
        explained = [a for a in self.arguments if a.help]
        if explained:
            width = max(len(a.name) for a in explained)
            lines = [f"  {a.name.ljust(width)}  {a.help}" for a in explained]
            text += "\n\n\b\nArguments:\n" + "\n".join(lines)
        return text


def _convert(type_name: str, value: Any) -> Any:
    if value is None:
        return None
    parser = parser_for(type_name)
    if parser is None:
        return value
    return parser(value)


@dataclass(frozen=True)
class MenuInvocation:
    """The owning menu plus its parsed menu-wide options, for one invocation."""

    menu: "CommandMenu"
    options: MenuOptions
    g: GlobalOpts


class CommandBuilder:
    def __init__(self, menu: "CommandMenu", usage: str) -> None:
        tokens = usage.split()
        if not tokens:
            raise ValueError("command usage must start with a name")
        self._menu = menu
        self._name = tokens[0]
        self._arguments: list[ArgumentSpec] = []
        for tok in tokens[1:]:
            m = _USAGE_TOKEN_RE.match(tok)
            if not m:
                raise ValueError(f"invalid argument placeholder {tok!r} in {usage!r}")
            if m.group(2):
                self._arguments.append(ArgumentSpec(name=m.group(2), required=True))
            else:
                self._arguments.append(ArgumentSpec(name=m.group(3), required=False))
        if any(a.required for a in self._arguments[self._first_optional() :]):
            raise ValueError(f"required argument after optional one in {usage!r}")
        self._description = ""
        self._options: list[OptionSpec] = []
        self._paired: list[tuple[str, str]] = []

    def _first_optional(self) -> int:
        for i, a in enumerate(self._arguments):
            if not a.required:
                return i
        return len(self._arguments)

    def description(self, text: str, arguments: Mapping[str, str] | None = None) -> "CommandBuilder":
        self._description = text
        for name, explanation in (arguments or {}).items():
            idx = next((i for i, a in enumerate(self._arguments) if a.name == name), None)
            if idx is None:
                raise ValueError(f"{self._name}: no argument named {name!r}")
            m = _ARG_TYPE_RE.match(explanation)
            current = self._arguments[idx]
            self._arguments[idx] = ArgumentSpec(
                name=current.name,
                required=current.required,
                help=explanation,
                type_name=m.group(1) if m else "string",
            )
        return self

    def _add_option(self, flags: str, help: str, *, required: bool) -> "CommandBuilder":
        m = _OPTION_FLAGS_RE.match(flags.strip())
        if not m:
            raise ValueError(f"{self._name}: invalid option declaration {flags!r}")
        spec = OptionSpec(flag=m.group(1), type_name=m.group(2), help=help, required=required)
        if any(o.flag == spec.flag for o in self._options):
            raise ValueError(f"{self._name}: duplicate option {spec.flag}")
        if spec.py_name in _menu_option_names(self._menu.kind) or spec.flag in _menu_option_flags(self._menu.kind):
            raise ValueError(f"{self._name}: option {spec.flag} shadows a menu option")
        self._options.append(spec)
        return self

    def option(self, flags: str, help: str = "") -> "CommandBuilder":
        return self._add_option(flags, help, required=False)

    def required_option(self, flags: str, help: str = "") -> "CommandBuilder":
        return self._add_option(flags, help, required=True)

    def paired(self, first: str, second: str) -> "CommandBuilder":
        known = {o.flag for o in self._options}
        for flag in (first, second):
            if flag not in known:
                raise ValueError(f"{self._name}: paired option {flag} is not declared")
        self._paired.append((first, second))
        return self

    def action(self, handler: Handler) -> CommandSpec:
        spec = CommandSpec(
            name=self._name,
            description=self._description,
            arguments=tuple(self._arguments),
            options=tuple(self._options),
            paired=tuple(self._paired),
            handler=handler,
        )
        self._menu._add(spec)
        return spec


class CommandMenu:
    def __init__(self, kind: str, name: str, description: str) -> None:
        if kind not in (EXEC, QUERY):
            raise ValueError(f"unknown menu kind: {kind}")
        self.kind = kind
        self.name = name
        self.description = description
        self._commands: dict[str, CommandSpec] = {}
        self._frozen = False

    def command(self, usage: str) -> CommandBuilder:
        if self._frozen:
            raise RuntimeError(f"{self.kind} menu {self.name!r} is frozen")
        return CommandBuilder(self, usage)

    def _add(self, spec: CommandSpec) -> None:
        if self._frozen:
            raise RuntimeError(f"{self.kind} menu {self.name!r} is frozen")
        if spec.name in self._commands:
            raise ValueError(f"duplicate command {spec.name!r} in {self.kind} menu {self.name!r}")
        self._commands[spec.name] = spec

    def freeze(self) -> None:
        self._frozen = True

    @property
    def commands(self) -> tuple[CommandSpec, ...]:
        return tuple(self._commands.values())

    def get(self, name: str) -> CommandSpec:
        return self._commands[name]

    def to_click(self) -> click.Group:
        group = click.Group(name=self.name, help=self.description, no_args_is_help=True)
        for spec in self.commands:
            group.add_command(self._click_command(spec))
        return group

    def _click_command(self, spec: CommandSpec) -> click.Command:
        params: list[click.Parameter] = []
        for arg in spec.arguments:
            params.append(
                click.Argument(
                    [arg.py_name],
                    required=arg.required,
                    metavar=f"<{arg.name}>" if arg.required else f"[{arg.name}]",
                )
            )
        for opt in spec.options:
            if opt.is_flag:
                params.append(click.Option([opt.flag], is_flag=True, default=False, help=opt.help))
            else:
                params.append(
                    click.Option(
                        [opt.flag],
                        metavar=f"<{opt.type_name}>",
                        required=opt.required,
                        help=opt.help,
                    )
                )
        params.extend(_menu_params(self.kind))

        def _callback(**kwargs: Any) -> None:
            _run_command(click.get_current_context(), self, spec, kwargs)

        return click.Command(name=spec.name, callback=_callback, params=params, help=spec.help_text())


def create_exec_menu(name: str, description: str) -> CommandMenu:
    return CommandMenu(EXEC, name, description)


def create_query_menu(name: str, description: str) -> CommandMenu:
    return CommandMenu(QUERY, name, description)


@dataclass
class CommandRegistry:
    """Owns every menu registered for one CLI build."""

    menus: list[CommandMenu] = field(default_factory=list)
    frozen: bool = False

    def _track(self, menu: CommandMenu) -> CommandMenu:
        if self.frozen:
            raise RuntimeError("command registry is frozen")
        if any(m.kind == menu.kind and m.name == menu.name for m in self.menus):
            raise ValueError(f"duplicate {menu.kind} menu {menu.name!r}")
        self.menus.append(menu)
        return menu

    def create_exec_menu(self, name: str, description: str) -> CommandMenu:
        return self._track(create_exec_menu(name, description))

    def create_query_menu(self, name: str, description: str) -> CommandMenu:
        return self._track(create_query_menu(name, description))

    def menus_of(self, kind: str) -> list[CommandMenu]:
        return [m for m in self.menus if m.kind == kind]

    def freeze(self) -> None:
        self.frozen = True
        for m in self.menus:
            m.freeze()


def _exec_menu_params() -> list[click.Parameter]:
    return [
        click.Option(
            ["--from", "from_key"],
            metavar="<key-name>",
            required=True,
            help="*Name of key to sign with (an address is accepted with --generate-only)",
        ),
        click.Option(["--generate-only"], is_flag=True, default=False, help="Build an unsigned tx and print it"),
        click.Option(["--fee"], metavar="<coins>", help="Fee to pay, e.g. 75000uusd"),
        click.Option(["--gas"], type=int, metavar="<int>", help="Gas limit"),
        click.Option(["--gas-prices"], metavar="<coins>", help="Gas prices, e.g. 0.15uusd"),
        click.Option(["--memo"], metavar="<string>", default="", help="Transaction memo"),
        click.Option(
            ["--broadcast-mode"],
            type=click.Choice(list(BROADCAST_MODES)),
            default="block",
            show_default=True,
            help="Transaction broadcast mode",
        ),
        click.Option(["--account-number"], type=int, metavar="<int>", help="Signer account number (skips lookup)"),
        click.Option(["--sequence"], type=int, metavar="<int>", help="Signer sequence (skips lookup)"),
        *_query_menu_params(),
    ]


def _query_menu_params() -> list[click.Parameter]:
    return [
        click.Option(["--chain-id"], metavar="<string>", help="Chain ID (default: network preset)"),
        click.Option(["--lcd-url"], metavar="<url>", help="LCD endpoint (default: network preset)"),
        click.Option(["--yaml", "-y", "yaml"], is_flag=True, default=False, help="Output as YAML"),
    ]


def _menu_params(kind: str) -> list[click.Parameter]:
    return _exec_menu_params() if kind == EXEC else _query_menu_params()


def _menu_option_names(kind: str) -> set[str]:
    return {str(p.name) for p in _menu_params(kind)}


def _menu_option_flags(kind: str) -> set[str]:
    return {flag for p in _menu_params(kind) for flag in p.opts}


def _ctx_global(ctx: click.Context) -> GlobalOpts:
    obj = ctx.find_root().obj
    if isinstance(obj, dict) and isinstance(obj.get("g"), GlobalOpts):
        return obj["g"]
    return GlobalOpts(network=DEFAULT_NETWORK)


def _fail(err: MirrorCliError) -> None:
    _rich_error(str(err))
    raise click.exceptions.Exit(_exit_code_for(err))


def _run_command(ctx: click.Context, menu: CommandMenu, spec: CommandSpec, kwargs: dict[str, Any]) -> None:
    menu_names = _menu_option_names(menu.kind)
    menu_opts = MenuOptions(**{k: v for k, v in kwargs.items() if k in menu_names})
    raw = {k: v for k, v in kwargs.items() if k not in menu_names}
    invocation = MenuInvocation(menu=menu, options=menu_opts, g=_ctx_global(ctx))
    try:
        opts = spec.parse(raw)
        spec.handler(invocation, opts)
    except MirrorCliError as e:
        _fail(e)


def _calls_list(result: Any) -> list[ContractCall]:
    calls = [result] if isinstance(result, ContractCall) else list(result or [])
    if not calls or not all(isinstance(c, ContractCall) for c in calls):
        raise OpError("exec handler did not produce a contract call")
    return calls


def build_unsigned_tx(msgs: list[dict[str, Any]], *, fee: dict[str, Any], memo: str) -> dict[str, Any]:
    return {
        "type": "core/StdTx",
        "value": {
            "msg": msgs,
            "fee": fee,
            "signatures": None,
            "memo": memo or "",
        },
    }


def _as_int(value: Any) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


def normalize_receipt(doc: Mapping[str, Any]) -> dict[str, Any]:
    logs = doc.get("logs")
    return {
        "txhash": str(doc.get("txhash") or ""),
        "height": _as_int(doc.get("height")),
        "code": _as_int(doc.get("code")),
        "codespace": str(doc.get("codespace") or ""),
        "raw_log": str(doc.get("raw_log") or ""),
        "gas_wanted": _as_int(doc.get("gas_wanted")),
        "gas_used": _as_int(doc.get("gas_used")),
        "logs": logs if isinstance(logs, list) else [],
    }


def handle_exec_command(menu: MenuInvocation, fn: Callable[[Mirror], Any]) -> None:
    opts = menu.options
    try:
        ctx = resolve_exec_context(menu.g, opts)
        lcd = LCDClient(ctx.lcd_url, ctx.chain_id)
        mirror = Mirror(lcd, ctx.load_contracts)
        calls = _calls_list(fn(mirror))
        signer = ctx.signer
        if signer is None or ctx.fee is None:
            raise OpError("exec context is missing a signer or fee")
        sender = signer.address()
        unsigned = build_unsigned_tx(
            [c.to_msg(sender) for c in calls],
            fee=ctx.fee.to_data(),
            memo=opts.memo,
        )
        if opts.generate_only:
            _print_result(unsigned, pretty=menu.g.pretty, as_yaml=opts.yaml)
            return
        account_number, sequence = opts.account_number, opts.sequence
        if account_number is None or sequence is None:
            fetched_number, fetched_sequence = lcd.account_info(sender)
            account_number = fetched_number if account_number is None else account_number
            sequence = fetched_sequence if sequence is None else sequence
        signed = signer.sign(unsigned, chain_id=ctx.chain_id, account_number=account_number, sequence=sequence)
        log.debug("broadcasting %d msg(s) from %s (mode=%s)", len(calls), sender, opts.broadcast_mode)
        receipt = normalize_receipt(lcd.broadcast(signed, mode=opts.broadcast_mode))
        _print_result(receipt, pretty=menu.g.pretty, as_yaml=opts.yaml)
        if receipt["code"]:
            raise OpError(f"transaction {receipt['txhash']} failed with code {receipt['code']}: {receipt['raw_log']}")
    except MirrorCliError as e:
        _fail(e)


def handle_query_command(menu: MenuInvocation, fn: Callable[[Mirror], Any]) -> None:
    opts = menu.options
    try:
        ctx = resolve_query_context(menu.g, opts)
        mirror = Mirror(LCDClient(ctx.lcd_url, ctx.chain_id), ctx.load_contracts)
        result = fn(mirror)
        _print_result(result, pretty=menu.g.pretty, as_yaml=opts.yaml)
    except MirrorCliError as e:
        _fail(e)


def iter_commands(registry: CommandRegistry) -> Iterable[tuple[CommandMenu, CommandSpec]]:
    for menu in registry.menus:
        for spec in menu.commands:
            yield menu, spec
