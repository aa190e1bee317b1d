import os

import pytest
import requests
import responses

from tasksmith.errors import (
    TaskfileFetchFailedError,
    TaskfileNetworkTimeoutError,
    TaskfileNotFoundError,
)
from tasksmith.locate import DEFAULT_TASKFILES, exists, exists_walk, remote_exists


def test_exists_with_file(tmp_path):
    target = tmp_path / "custom.yml"
    target.write_text("version: '3'\n")
    assert exists(str(target)) == os.path.abspath(str(target))


def test_exists_with_directory(tmp_path):
    (tmp_path / "Taskfile.yml").write_text("version: '3'\n")
    assert exists(str(tmp_path)) == os.path.join(str(tmp_path), "Taskfile.yml")


def test_exists_prefers_earlier_default_name(tmp_path):
    (tmp_path / "Taskfile.dist.yml").write_text("version: '3'\n")
    (tmp_path / "Taskfile.yml").write_text("version: '3'\n")
    assert exists(str(tmp_path)) == os.path.join(str(tmp_path), "Taskfile.yml")


def test_exists_uses_dist_when_alone(tmp_path):
    (tmp_path / "Taskfile.dist.yaml").write_text("version: '3'\n")
    assert os.path.basename(exists(str(tmp_path))) == "Taskfile.dist.yaml"


def test_exists_empty_directory(tmp_path):
    with pytest.raises(TaskfileNotFoundError) as info:
        exists(str(tmp_path))
    assert info.value.uri == str(tmp_path)
    assert info.value.walk is False


def test_exists_missing_path(tmp_path):
    with pytest.raises(FileNotFoundError):
        exists(str(tmp_path / "nothing"))


def test_exists_walk_finds_parent_taskfile(tmp_path):
    (tmp_path / "Taskfile.yml").write_text("version: '3'\n")
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)
    assert exists_walk(str(nested)) == os.path.join(str(tmp_path), "Taskfile.yml")


def test_exists_walk_prefers_nearest(tmp_path):
    (tmp_path / "Taskfile.yml").write_text("version: '3'\n")
    nested = tmp_path / "a"
    nested.mkdir()
    (nested / "Taskfile.yml").write_text("version: '3'\n")
    assert exists_walk(str(nested)) == os.path.join(str(nested), "Taskfile.yml")


def test_exists_walk_missing_directory(tmp_path):
    with pytest.raises(FileNotFoundError):
        exists_walk(str(tmp_path / "absent"))


def test_remote_exists_direct_yaml():
    url = "https://example.com/Taskfile.yml"
    with responses.RequestsMock() as mock:
        mock.add(responses.HEAD, url, status=200, content_type="text/yaml")
        assert remote_exists(url, 5) == url


def test_remote_exists_falls_back_to_default_name():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as mock:
        mock.add(responses.HEAD, "https://example.com/dir", status=404)
        mock.add(responses.HEAD, "https://example.com/dir/Taskfile.yml", status=200)
        assert remote_exists("https://example.com/dir", 5) == "https://example.com/dir/Taskfile.yml"


def test_remote_exists_wrong_content_type_tries_alternatives():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as mock:
        mock.add(responses.HEAD, "https://example.com", status=200, content_type="text/html")
        mock.add(responses.HEAD, "https://example.com/Taskfile.yml", status=200)
        assert remote_exists("https://example.com", 5) == "https://example.com/Taskfile.yml"


def test_remote_exists_nothing_found():
    with responses.RequestsMock() as mock:
        mock.add(responses.HEAD, "https://example.com/dir", status=404)
        for name in DEFAULT_TASKFILES:
            mock.add(responses.HEAD, f"https://example.com/dir/{name}", status=404)
        with pytest.raises(TaskfileNotFoundError):
            remote_exists("https://example.com/dir", 5)


def test_remote_exists_timeout():
    url = "https://example.com/Taskfile.yml"
    with responses.RequestsMock() as mock:
        mock.add(responses.HEAD, url, body=requests.exceptions.ReadTimeout())
        with pytest.raises(TaskfileNetworkTimeoutError) as info:
            remote_exists(url, 3)
    assert info.value.uri == url
    assert info.value.timeout == 3


def test_remote_exists_connection_failure():
    url = "https://example.com/Taskfile.yml"
    with responses.RequestsMock() as mock:
        mock.add(responses.HEAD, url, body=requests.exceptions.ConnectionError())
        with pytest.raises(TaskfileFetchFailedError) as info:
            remote_exists(url, 3)
    assert info.value.uri == url