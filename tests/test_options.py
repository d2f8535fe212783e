import pytest

from vim_init.errors import OptionTypeError, UnknownOptionError
from vim_init.host import HostContext
from vim_init.options import (
    Option,
    OptionSpec,
    OptionStore,
    apply_globals,
    apply_options,
    build_catalogue,
    find_matches,
    is_case_sensitive,
)


def make_host() -> HostContext:
    return HostContext()


def make_search_options(*, ignorecase: bool, smartcase: bool) -> OptionStore:
    store = OptionStore()
    store.set("ignorecase", ignorecase)
    store.set("smartcase", smartcase)
    return store


def test_defaults_come_from_catalogue() -> None:
    store = OptionStore()

    assert store.get("tabstop") == 8
    assert store["ts"] == 8
    assert not store.is_set("tabstop")


def test_aliases_write_the_full_name() -> None:
    store = OptionStore()

    store.set("sw", 4)

    assert store.get("shiftwidth") == 4
    assert store.changed() == {"shiftwidth": 4}


def test_setting_twice_is_idempotent() -> None:
    store = OptionStore()
    store.set("expandtab", True)
    revision = store.revision()

    store.set("expandtab", True)

    assert store.get("expandtab") is True
    assert store.revision() == revision


def test_last_write_wins() -> None:
    store = OptionStore()
    store.set("scrolloff", 4)
    store.set("scrolloff", 12)

    assert store.get("scrolloff") == 12
    assert store.last_change is not None
    assert store.last_change.previous == 4


def test_unknown_option_raises() -> None:
    store = OptionStore()

    with pytest.raises(UnknownOptionError) as excinfo:
        store.set("nosuchoption", True)

    assert excinfo.value.name == "nosuchoption"
    assert "nosuchoption" in str(excinfo.value)


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("tabstop", "4"),
        ("tabstop", True),
        ("number", "yes"),
        ("signcolumn", "sometimes"),
        ("foldmethod", 3),
    ],
)
def test_ill_typed_values_raise(name: str, value: object) -> None:
    store = OptionStore()

    with pytest.raises(OptionTypeError):
        store.set(name, value)


def test_list_options_accept_strings_and_sequences() -> None:
    store = OptionStore()

    assert store.set("backspace", "indent,eol,start") == ("indent", "eol", "start")
    assert store.set("colorcolumn", (80, 120)) == ("80", "120")
    assert store.set("colorcolumn", "80,80,120") == ("80", "120")


def test_bool_accepts_zero_and_one() -> None:
    store = OptionStore()

    assert store.set("wrap", 0) is False
    assert store.set("wrap", 1) is True


def test_path_options_expand_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HOME", "/home/tester")
    store = OptionStore()

    assert store.set("undodir", "$HOME/.vim/undodir") == "/home/tester/.vim/undodir"


def test_duplicate_alias_is_rejected() -> None:
    specs = (
        OptionSpec("alpha", "bool", False, ("a",)),
        OptionSpec("another", "bool", False, ("a",)),
    )

    with pytest.raises(ValueError):
        build_catalogue(specs)


def test_apply_options_skips_bad_entries_and_continues() -> None:
    host = make_host()
    options = (
        Option("number", True),
        Option("nosuchoption", 1),
        Option("tabstop", "wide"),
        Option("relativenumber", True),
    )

    applied = apply_options(host, options)

    assert applied == ["number", "relativenumber"]
    assert host.options.get("relativenumber") is True
    assert [type(err) for err in host.errors] == [UnknownOptionError, OptionTypeError]


def test_apply_globals_sets_leader() -> None:
    host = make_host()

    apply_globals(host, {"mapleader": " ", "have_nerd_font": False})

    assert host.leader() == " "
    assert host.globals["have_nerd_font"] is False


def test_smartcase_search_sensitivity() -> None:
    options = make_search_options(ignorecase=True, smartcase=True)

    assert is_case_sensitive("Foo", options)
    assert not is_case_sensitive("foo", options)


def test_case_flags_override_options() -> None:
    options = make_search_options(ignorecase=True, smartcase=True)

    assert not is_case_sensitive("Foo\\c", options)
    assert is_case_sensitive("foo\\C", options)


def test_escaped_atoms_do_not_count_as_uppercase() -> None:
    options = make_search_options(ignorecase=True, smartcase=True)

    assert not is_case_sensitive("\\Sfoo", options)


def test_ignorecase_off_is_always_sensitive() -> None:
    options = make_search_options(ignorecase=False, smartcase=True)

    assert is_case_sensitive("foo", options)


def test_find_matches_follows_smartcase() -> None:
    options = make_search_options(ignorecase=True, smartcase=True)
    lines = ["Foo bar", "foo FOO"]

    assert list(find_matches(lines, "foo", options)) == [(0, 0), (1, 0), (1, 4)]
    assert list(find_matches(lines, "Foo", options)) == [(0, 0)]
