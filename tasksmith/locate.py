"""Finding Taskfiles on disk and on remote servers."""

from __future__ import annotations

import logging
import os
import posixpath
import stat
from urllib.parse import urlsplit, urlunsplit

import requests

from tasksmith.errors import (
    TaskfileFetchFailedError,
    TaskfileNetworkTimeoutError,
    TaskfileNotFoundError,
)

_log = logging.getLogger(__name__)

DEFAULT_TASKFILES = (
    "Taskfile.yml",
    "taskfile.yml",
    "Taskfile.yaml",
    "taskfile.yaml",
    "Taskfile.dist.yml",
    "taskfile.dist.yml",
    "Taskfile.dist.yaml",
    "taskfile.dist.yaml",
)
ALLOWED_CONTENT_TYPES = (
    "text/plain",
    "text/yaml",
    "text/x-yaml",
    "application/yaml",
    "application/x-yaml",
)


def _is_file_like(mode: int) -> bool:
    return (
        stat.S_ISREG(mode)
        or stat.S_ISCHR(mode)
        or stat.S_ISBLK(mode)
        or stat.S_ISLNK(mode)
        or stat.S_ISFIFO(mode)
    )


def exists(path: str) -> str:
    """Return the absolute path of the Taskfile at ``path``.

    If ``path`` is a directory, the first default Taskfile name found in it is
    used. Raises ``OSError`` if ``path`` does not exist and
    ``TaskfileNotFoundError`` if the directory holds no Taskfile.
    """
    info = os.stat(path)
    if _is_file_like(info.st_mode):
        return os.path.abspath(path)
    for name in DEFAULT_TASKFILES:
        alternative = os.path.join(path, name)
        if os.path.exists(alternative):
            _log.debug("task: [%s] Not found - Using alternative (%s)", path, name)
            return os.path.abspath(alternative)
    raise TaskfileNotFoundError(path, False)


def _parent(path: str) -> str:
    return os.path.dirname(os.path.normpath(path)) or "."


def exists_walk(path: str) -> str:
    """Look for a Taskfile in ``path`` and then in each parent directory.

    The walk stops at the root directory or where the owner of the directory changes.
    """
    original = path
    owner = os.stat(path).st_uid
    while True:
        try:
            return exists(path)
        except (OSError, TaskfileNotFoundError):
            pass
        parent = _parent(path)
        parent_owner = os.stat(parent).st_uid
        if path == parent or parent_owner != owner:
            raise TaskfileNotFoundError(original, False)
        owner = parent_owner
        path = parent


def remote_exists(url: str, timeout: float) -> str:
    """Return the URL of a remote Taskfile at ``url``.

    If ``url`` does not serve a YAML document, each default Taskfile name is
    tried beneath it and the first that answers is returned.
    """
    try:
        response = requests.head(url, timeout=timeout)
    except requests.exceptions.Timeout as err:
        raise TaskfileNetworkTimeoutError(url, timeout) from err
    except requests.exceptions.RequestException as err:
        raise TaskfileFetchFailedError(url) from err

    content_type = response.headers.get("Content-Type", "")
    if response.status_code == 200 and any(kind in content_type for kind in ALLOWED_CONTENT_TYPES):
        return url

    parts = urlsplit(url)
    base_path = parts.path or "/"
    base = urlunsplit(parts._replace(path=base_path))
    for name in DEFAULT_TASKFILES:
        alternative = urlunsplit(parts._replace(path=posixpath.normpath(posixpath.join(base_path, name))))
        try:
            response = requests.head(alternative, timeout=timeout)
        except requests.exceptions.RequestException as err:
            raise TaskfileFetchFailedError(base) from err
        if response.status_code == 200:
            _log.debug("task: [%s] Not found - Using alternative (%s)", alternative, name)
            return alternative

    raise TaskfileNotFoundError(base, False)