"""Option catalogue, option store and search semantics."""

from .models import (
    DEFAULT_CATALOGUE,
    DEFAULT_OPTION_SPECS,
    Option,
    OptionSpec,
    build_catalogue,
)
from .search import compile_search, find_matches, is_case_sensitive
from .setter import apply_globals, apply_options
from .store import OptionChange, OptionStore

__all__ = [
    "Option",
    "OptionSpec",
    "OptionStore",
    "OptionChange",
    "DEFAULT_CATALOGUE",
    "DEFAULT_OPTION_SPECS",
    "build_catalogue",
    "apply_options",
    "apply_globals",
    "is_case_sensitive",
    "compile_search",
    "find_matches",
]
