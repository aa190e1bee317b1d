import pytest

from tasksmith.ast.decoding import decode
from tasksmith.ast.include import Include
from tasksmith.ast.output import Output
from tasksmith.ast.taskfile import V3, Taskfile, parse_duration
from tasksmith.ast.tasks import task_name_with_namespace
from tasksmith.ast.vars import Var, Vars
from tasksmith.errors import TaskfileDecodeError, TaskfileError

TEXT = """
version: '3'
output: prefixed
vars:
  GREETING: hello
tasks:
  default:
    cmds: [echo hi]
interval: 2s
"""

CHILD = """
version: '3'
vars:
  CHILD_VAR: child
tasks:
  build: echo build
"""


def test_parse_duration_seconds():
    assert parse_duration("5s") == 5.0


def test_parse_duration_zero():
    assert parse_duration("0") == 0.0


def test_parse_duration_units_agree():
    assert parse_duration("1m") == parse_duration("60s")
    assert parse_duration("1h") == 60 * parse_duration("1m")
    assert parse_duration("1.5s") == parse_duration("1500ms")
    assert parse_duration("1m30s") == parse_duration("1m") + parse_duration("30s")
    assert parse_duration("-1s") == -parse_duration("1s")


@pytest.mark.parametrize("text", ["", "5", "1x", ".s", "abc", "s"])
def test_parse_duration_rejects_invalid(text):
    with pytest.raises(ValueError):
        parse_duration(text)


def test_decode_taskfile():
    tf = decode(Taskfile, TEXT)
    assert tf.version == V3
    assert tf.output == Output(name="prefixed")
    assert tf.vars == Vars({"GREETING": Var(value="hello")})
    assert tf.env == Vars()
    assert tf.interval == parse_duration("2s")
    assert list(tf.tasks) == ["default"]
    assert tf.tasks["default"].task == "default"


def test_missing_version_is_none():
    tf = decode(Taskfile, "tasks:\n  build: echo\n")
    assert tf.version is None
    assert tf.vars == Vars()


def test_invalid_version_is_decode_error():
    with pytest.raises(TaskfileDecodeError):
        decode(Taskfile, "version: not-a-version\n")


def test_interval_without_unit_is_decode_error():
    with pytest.raises(TaskfileDecodeError):
        decode(Taskfile, "version: '3'\ninterval: 5\n")


def test_non_mapping_is_decode_error():
    with pytest.raises(TaskfileDecodeError):
        decode(Taskfile, "- a\n- b\n")


def test_merge_includes_tasks_and_vars():
    parent = decode(Taskfile, TEXT)
    child = decode(Taskfile, CHILD)
    parent.merge(child, Include(namespace="lib"))
    assert list(parent.tasks) == ["default", task_name_with_namespace("build", "lib")]
    assert parent.vars["CHILD_VAR"] == Var(value="child")
    assert parent.vars["GREETING"] == Var(value="hello")
    assert parent.output == Output(name="prefixed")


def test_merge_takes_included_output_when_set():
    parent = decode(Taskfile, TEXT)
    child = decode(Taskfile, "version: '3'\noutput:\n  group:\n    begin: start\n")
    parent.merge(child, Include(namespace="lib"))
    assert parent.output == child.output


def test_merge_version_mismatch():
    parent = decode(Taskfile, TEXT)
    child = decode(Taskfile, "version: '2'\n")
    with pytest.raises(TaskfileError) as info:
        parent.merge(child, Include(namespace="lib"))
    assert "versions should match" in str(info.value)


def test_merge_rejects_dotenv_in_included():
    parent = decode(Taskfile, TEXT)
    child = decode(Taskfile, "version: '3'\ndotenv: [.env]\n")
    with pytest.raises(TaskfileError) as info:
        parent.merge(child, Include(namespace="lib"))
    assert "dotenv" in str(info.value)