from types import SimpleNamespace

import pytest

from tasksmith.ast.decoding import compose, decode
from tasksmith.ast.vars import Var, Vars
from tasksmith.errors import TaskfileDecodeError


def test_var_static_value():
    assert Var.from_node(compose("hello")) == Var(value="hello")
    assert Var.from_node(compose("[1, 2]")) == Var(value=[1, 2])


def test_var_sh_and_ref():
    assert Var.from_node(compose("sh: echo hi")) == Var(sh="echo hi")
    assert Var.from_node(compose("ref: .OTHER")) == Var(ref=".OTHER")


def test_var_other_map_rejected():
    with pytest.raises(TaskfileDecodeError) as info:
        Var.from_node(compose("key: value"))
    assert info.value.message == "maps cannot be assigned to variables"


def test_vars_keep_order():
    parsed = decode(Vars, "B: 1\nA: two\nC: {sh: date}")
    assert list(parsed) == ["B", "A", "C"]
    assert parsed["A"] == Var(value="two")
    assert parsed["C"].sh == "date"


def test_vars_reject_sequence():
    with pytest.raises(TaskfileDecodeError):
        decode(Vars, "[a, b]")


def test_merge_plain():
    base = Vars(A=Var(value="1"))
    base.merge(Vars(B=Var(value="2"), A=Var(value="3")))
    assert base == {"A": Var(value="3"), "B": Var(value="2")}
    assert list(base) == ["A", "B"]


def test_merge_advanced_import_sets_dir():
    base = Vars()
    other = Vars(A=Var(value="1"))
    base.merge(other, SimpleNamespace(advanced_import=True, dir="lib"))
    assert base["A"].dir == "lib"
    assert other["A"].dir == ""


def test_merge_without_advanced_import_keeps_dir():
    base = Vars()
    base.merge(Vars(A=Var(value="1", dir="orig")), SimpleNamespace(advanced_import=False, dir="lib"))
    assert base["A"].dir == "orig"


def test_merge_none_is_noop():
    base = Vars(A=Var(value="1"))
    base.merge(None)
    assert base == {"A": Var(value="1")}


def test_deep_copy_is_independent():
    original = Vars(A=Var(value=["x"]))
    duplicate = original.deep_copy()
    assert duplicate == original
    duplicate["A"].value.append("y")
    duplicate["B"] = Var(value="b")
    assert original == {"A": Var(value=["x"])}


def test_to_cache_map():
    vars_ = Vars(
        STATIC=Var(value="s"),
        LIVE=Var(value="old", live="new"),
        DYNAMIC=Var(sh="date"),
    )
    assert vars_.to_cache_map() == {"STATIC": "s", "LIVE": "new"}