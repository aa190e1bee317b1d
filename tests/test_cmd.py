import pytest

from tasksmith.ast.cmd import Cmd
from tasksmith.ast.decoding import decode
from tasksmith.ast.loop import For
from tasksmith.ast.platform import Platform
from tasksmith.ast.vars import Var, Vars
from tasksmith.errors import TaskfileDecodeError

YAML_TASK_CALL = """
task: another-task
vars:
  PARAM1: VALUE1
  PARAM2: VALUE2
"""


def test_string_command():
    assert decode(Cmd, 'echo "a string command"') == Cmd(cmd='echo "a string command"')


def test_task_call():
    cmd = decode(Cmd, YAML_TASK_CALL)
    assert cmd == Cmd(
        task="another-task",
        vars=Vars({"PARAM1": Var(value="VALUE1"), "PARAM2": Var(value="VALUE2")}),
    )
    assert list(cmd.vars) == ["PARAM1", "PARAM2"]


def test_deferred_command():
    assert decode(Cmd, "defer: echo 'test'") == Cmd(cmd="echo 'test'", defer=True)


def test_deferred_call():
    cmd = decode(Cmd, 'defer: { task: some_task, vars: { PARAM1: "var" } }')
    assert cmd == Cmd(task="some_task", vars=Vars({"PARAM1": Var(value="var")}), defer=True)


def test_command_mapping_with_options():
    cmd = decode(
        Cmd,
        "cmd: echo hi\nsilent: true\nignore_error: true\nset: [errexit]\nplatforms: [linux/amd64]",
    )
    assert cmd.cmd == "echo hi"
    assert cmd.silent is True
    assert cmd.ignore_error is True
    assert cmd.set == ["errexit"]
    assert cmd.platforms == [Platform(os="linux", arch="amd64")]
    assert cmd.defer is False


def test_task_call_with_for():
    cmd = decode(Cmd, "task: build\nfor: [a, b]")
    assert cmd.task == "build"
    assert cmd.for_ == For(items=["a", "b"])


def test_invalid_keys():
    with pytest.raises(TaskfileDecodeError) as info:
        decode(Cmd, "unknown: value")
    assert info.value.message == "invalid keys in command"


def test_wrong_kind():
    with pytest.raises(TaskfileDecodeError):
        decode(Cmd, "[a, b]")


def test_deep_copy_independent():
    original = decode(Cmd, YAML_TASK_CALL)
    copied = original.deep_copy()
    assert copied == original
    copied.vars["PARAM3"] = Var(value="x")
    copied.set.append("pipefail")
    assert list(original.vars) == ["PARAM1", "PARAM2"]
    assert original.set == []