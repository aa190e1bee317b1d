import pytest

from tasksmith.ast.decoding import decode
from tasksmith.ast.platform import InvalidPlatformError, Platform
from tasksmith.errors import TaskfileDecodeError


@pytest.mark.parametrize(
    ("text", "expected_os", "expected_arch"),
    [
        ("windows", "windows", ""),
        ("linux", "linux", ""),
        ("darwin", "darwin", ""),
        ("386", "", "386"),
        ("amd64", "", "amd64"),
        ("arm64", "", "arm64"),
        ("windows/386", "windows", "386"),
        ("windows/amd64", "windows", "amd64"),
        ("windows/arm64", "windows", "arm64"),
    ],
)
def test_parse_valid(text, expected_os, expected_arch):
    platform = Platform.parse(text)
    assert platform.os == expected_os
    assert platform.arch == expected_arch


@pytest.mark.parametrize(
    ("text", "message"),
    [
        ("invalid", 'invalid platform "invalid"'),
        ("invalid/invalid", 'invalid platform "invalid/invalid"'),
        ("windows/invalid", 'invalid platform "windows/invalid"'),
        ("invalid/amd64", 'invalid platform "invalid/amd64"'),
    ],
)
def test_parse_invalid(text, message):
    with pytest.raises(InvalidPlatformError) as info:
        Platform.parse(text)
    assert str(info.value) == message
    assert info.value.platform == text


@pytest.mark.parametrize("text", ["", "linux/", "amd64/arm64", "linux/amd64/extra"])
def test_parse_rejects_malformed(text):
    with pytest.raises(InvalidPlatformError):
        Platform.parse(text)


def test_from_node_scalar():
    assert decode(Platform, "linux/amd64") == Platform(os="linux", arch="amd64")


def test_from_node_invalid_value():
    with pytest.raises(TaskfileDecodeError):
        decode(Platform, "nope")


def test_from_node_wrong_kind():
    with pytest.raises(TaskfileDecodeError):
        decode(Platform, "[linux]")


def test_deep_copy_independent():
    original = Platform(os="linux", arch="amd64")
    copied = original.deep_copy()
    copied.os = "windows"
    assert original.os == "linux"
    assert copied == Platform(os="windows", arch="amd64")