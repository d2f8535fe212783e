"""Option descriptors and the host's built-in option catalogue."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Literal, Mapping

from vim_init.errors import OptionTypeError
from vim_init.runtime.paths import expand_path

OptionKind = Literal["bool", "number", "string", "list", "path"]
OptionValue = bool | int | str | tuple[str, ...]


@dataclass(frozen=True, slots=True)
class Option:
    """A declared (name, value) pair waiting to be applied."""

    name: str
    value: object

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("option name cannot be empty")


@dataclass(frozen=True, slots=True)
class OptionSpec:
    """Describes one host option: its kind, default and short aliases."""

    name: str
    kind: OptionKind
    default: OptionValue
    aliases: tuple[str, ...] = ()
    choices: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("option name cannot be empty")

    def coerce(self, value: object) -> OptionValue:
        """Convert ``value`` to this option's kind or raise ``OptionTypeError``."""

        if self.kind == "bool":
            if isinstance(value, bool):
                return value
            if isinstance(value, int) and value in (0, 1):
                return bool(value)
            raise OptionTypeError(self.name, self.kind, value)

        if self.kind == "number":
            if isinstance(value, bool) or not isinstance(value, int):
                raise OptionTypeError(self.name, self.kind, value)
            return value

        if self.kind == "list":
            return self._coerce_list(value)

        if not isinstance(value, str):
            raise OptionTypeError(self.name, self.kind, value)
        if self.kind == "path":
            return expand_path(value)
        if self.choices and value.split(":", 1)[0] not in self.choices:
            raise OptionTypeError(self.name, "one of " + "|".join(self.choices), value)
        return value

    def _coerce_list(self, value: object) -> tuple[str, ...]:
        if isinstance(value, str):
            items: Iterable[object] = value.split(",")
        elif isinstance(value, (list, tuple, set, frozenset)):
            items = value
        else:
            raise OptionTypeError(self.name, self.kind, value)
        result: list[str] = []
        for item in items:
            if isinstance(item, bool) or not isinstance(item, (str, int)):
                raise OptionTypeError(self.name, self.kind, value)
            text = str(item).strip()
            if not text:
                continue
            if self.choices and text not in self.choices:
                raise OptionTypeError(
                    self.name, "items from " + "|".join(self.choices), value
                )
            if text not in result:
                result.append(text)
        return tuple(result)


def _bool(name: str, default: bool, *aliases: str) -> OptionSpec:
    return OptionSpec(name, "bool", default, aliases)


def _number(name: str, default: int, *aliases: str) -> OptionSpec:
    return OptionSpec(name, "number", default, aliases)


DEFAULT_OPTION_SPECS: tuple[OptionSpec, ...] = (
    OptionSpec(
        "backspace",
        "list",
        ("indent", "eol", "start"),
        ("bs",),
        ("indent", "eol", "start", "nostop"),
    ),
    OptionSpec("mouse", "string", "nvi"),
    _bool("ignorecase", False, "ic"),
    _bool("smartcase", False, "scs"),
    _bool("swapfile", True, "swf"),
    _bool("backup", False, "bk"),
    OptionSpec("undodir", "path", "~/.local/state/nvim/undo", ("udir",)),
    _bool("undofile", False, "udf"),
    OptionSpec("viewdir", "path", "~/.local/state/nvim/view", ("vdir",)),
    OptionSpec("directory", "path", "~/.local/state/nvim/swap", ("dir",)),
    _bool("termguicolors", False, "tgc"),
    OptionSpec("colorcolumn", "list", (), ("cc",)),
    _number("tabstop", 8, "ts"),
    _number("shiftwidth", 8, "sw"),
    _number("softtabstop", 0, "sts"),
    _bool("expandtab", False, "et"),
    _bool("autoindent", True, "ai"),
    _bool("smartindent", False, "si"),
    _bool("wrap", True),
    _bool("breakindent", False, "bri"),
    OptionSpec(
        "foldmethod",
        "string",
        "manual",
        ("fdm",),
        ("manual", "indent", "expr", "marker", "syntax", "diff"),
    ),
    OptionSpec("foldexpr", "string", "0", ("fde",)),
    _bool("foldenable", True, "fen"),
    _bool("relativenumber", False, "rnu"),
    _bool("number", False, "nu"),
    OptionSpec(
        "signcolumn", "string", "auto", ("scl",), ("yes", "no", "auto", "number")
    ),
    _bool("hlsearch", True, "hls"),
    _bool("incsearch", True, "is"),
    _bool("wrapscan", True, "ws"),
    _bool("cursorline", False, "cul"),
    _number("scrolloff", 0, "so"),
    _bool("splitright", False, "spr"),
    _bool("splitbelow", False, "sb"),
    _bool("showmode", True, "smd"),
)


def build_catalogue(specs: Iterable[OptionSpec]) -> Mapping[str, OptionSpec]:
    """Index ``specs`` by full name and by every alias."""

    index: dict[str, OptionSpec] = {}
    for spec in specs:
        for key in (spec.name, *spec.aliases):
            if key in index:
                raise ValueError(f"Duplicate option name or alias '{key}'")
            index[key] = spec
    return MappingProxyType(index)


DEFAULT_CATALOGUE = build_catalogue(DEFAULT_OPTION_SPECS)

__all__ = [
    "Option",
    "OptionKind",
    "OptionSpec",
    "OptionValue",
    "DEFAULT_OPTION_SPECS",
    "DEFAULT_CATALOGUE",
    "build_catalogue",
]
