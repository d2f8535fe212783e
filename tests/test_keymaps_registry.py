import pytest

from vim_init.host import HostContext
from vim_init.keymaps import (
    ExCommand,
    KeymapRegistry,
    KeySequence,
    expand_modes,
    parse_keys,
)


def make_registry(leader: str = " ") -> KeymapRegistry:
    return KeymapRegistry(leader=lambda: leader)


def make_sequence(*keys: str) -> KeySequence:
    return KeySequence.from_strings(*keys)


def test_set_binding_success() -> None:
    registry = make_registry()

    (binding,) = registry.set("n", "gd", "<cmd>echo hi<CR>", desc="greet")

    assert registry.stats().binding_count == 1
    assert list(registry.iter_bindings("normal")) == [binding]
    assert binding.action.kind == "command"
    assert binding.action.command == "echo hi"


def test_last_registration_wins() -> None:
    registry = make_registry()
    registry.set("n", "<Tab>", "<cmd>bnext<CR>")
    registry.set("n", "<Tab>", "<cmd>bprevious<CR>")

    binding = registry.get("normal", "<Tab>")

    assert binding is not None
    assert binding.action.command == "bprevious"
    assert registry.stats().binding_count == 1


def test_empty_mode_set_covers_normal_visual_select_operator() -> None:
    registry = make_registry()

    bindings = registry.set("", "<Up>", "<NOP>")

    assert {b.mode for b in bindings} == {"normal", "visual", "select", "operator"}
    assert registry.get("insert", "<Up>") is None


@pytest.mark.parametrize(
    ("modes", "expected"),
    [
        ("n", ("normal",)),
        ("v", ("visual", "select")),
        ("!", ("insert", "command")),
        (("n", "x"), ("normal", "visual")),
        ("insert", ("insert",)),
    ],
)
def test_expand_modes(modes: str | tuple[str, ...], expected: tuple[str, ...]) -> None:
    assert expand_modes(modes) == expected


def test_unknown_mode_rejected() -> None:
    with pytest.raises(ValueError):
        expand_modes("q")


def test_leader_expands_when_registered() -> None:
    leader = [" "]
    registry = KeymapRegistry(leader=lambda: leader[0])
    registry.set("n", "<leader>y", '"+y')
    leader[0] = ","
    registry.set("n", "<leader>p", '"+p')

    signatures = {b.lhs: b.key_signature for b in registry.all_bindings()}

    assert signatures == {"<leader>y": "space y", "<leader>p": ", p"}


def test_parse_keys_notation() -> None:
    assert parse_keys("<C-h>").tokens == ("ctrl+h",)
    assert parse_keys("<S-Tab>").tokens == ("shift+tab",)
    assert parse_keys("<leader><backspace>", leader=" ").tokens == (
        "space",
        "backspace",
    )
    assert parse_keys("<leader>rn", leader=" ").signature == "space r n"
    assert parse_keys("<lt>x").tokens == ("<", "x")


def test_unrecognised_group_is_literal() -> None:
    assert parse_keys("<foo>").tokens == ("<", "f", "o", "o", ">")


def test_delete_binding() -> None:
    registry = make_registry()
    registry.set("", "<leader>d", '"_d')

    removed = registry.delete("n", "<leader>d")

    assert len(removed) == 1
    assert registry.get("normal", "<leader>d") is None
    assert registry.get("visual", "<leader>d") is not None


def test_buffer_local_bindings_are_separate() -> None:
    registry = make_registry()
    registry.set("n", "gd", "<cmd>echo global<CR>")
    registry.set("n", "gd", "<cmd>echo local<CR>", buffer=3)

    assert registry.stats().binding_count == 2
    assert registry.stats().buffer_local_count == 1
    assert len(list(registry.iter_bindings("normal"))) == 1
    assert len(list(registry.iter_bindings("normal", buffer=3))) == 2
    assert len(list(registry.iter_bindings("normal", buffer=4))) == 1


def test_clear_buffer_removes_only_local_bindings() -> None:
    registry = make_registry()
    registry.set("n", "gd", "<cmd>echo global<CR>")
    registry.set("n", "gd", "<cmd>echo local<CR>", buffer=3)
    revision = registry.revision()

    assert registry.clear_buffer(3) == 1
    assert registry.get("normal", "gd") is not None
    assert registry.revision() > revision


def test_revision_changes_on_set() -> None:
    registry = make_registry()
    before = registry.revision()

    registry.set("n", "x", "y")

    assert registry.revision() == before + 1


def test_empty_rhs_rejected() -> None:
    registry = make_registry()

    with pytest.raises(ValueError):
        registry.set("n", "x", "")


def test_sequence_from_strings() -> None:
    sequence = make_sequence("g", "g")

    assert sequence.signature == "g g"


def test_tab_override_switches_to_previous_buffer() -> None:
    host = HostContext()
    host.keymaps.set("n", "<Tab>", ExCommand("bnext"))
    host.keymaps.set("n", "<Tab>", ExCommand("bprevious"))
    for name in ("a.txt", "b.txt", "c.txt"):
        host.open_buffer(name)

    result = host.feed_keys("n", "<Tab>")

    assert result.status == "match"
    assert host.buffers.current is not None
    assert host.buffers.current.name == "b.txt"
