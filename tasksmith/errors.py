"""Errors raised while locating, reading, decoding and merging Taskfiles."""

from __future__ import annotations

from typing import Any


def _short_tag(tag: str | None) -> str:
    prefix = "tag:yaml.org,2002:"
    if not tag:
        return ""
    if tag.startswith(prefix):
        return "!!" + tag[len(prefix):]
    return tag


def _format_timeout(seconds: float) -> str:
    if float(seconds).is_integer():
        return f"{int(seconds)}s"
    return f"{seconds}s"


class TaskfileError(Exception):
    """Base class for every Taskfile related error."""


class TaskfileDecodeError(TaskfileError):
    """A YAML node could not be decoded into a Taskfile structure."""

    def __init__(self, err: Any = None, node: Any = None) -> None:
        super().__init__()
        self.err = err
        self.message = ""
        self.location = ""
        self.snippet = ""
        mark = getattr(node, "start_mark", None)
        self.line = mark.line + 1 if mark is not None else 0
        self.column = mark.column + 1 if mark is not None else 0
        self.tag = _short_tag(getattr(node, "tag", None))

    def with_message(self, message: str) -> TaskfileDecodeError:
        """Set a human readable message and return the error itself."""
        self.message = message
        return self

    def with_type_message(self, type_name: str) -> TaskfileDecodeError:
        """Describe the error as a node of the wrong kind for ``type_name``."""
        self.message = f"cannot unmarshal {self.tag} into {type_name}"
        return self

    def with_file_info(self, location: str, content: bytes | str, padding: int) -> TaskfileDecodeError:
        """Attach the file location and a snippet of the lines around the error."""
        text = content.decode("utf-8", errors="replace") if isinstance(content, bytes) else content
        lines = text.splitlines()
        self.location = location
        if self.line > 0 and lines:
            start = max(self.line - padding, 1)
            end = min(self.line + padding, len(lines))
            width = len(str(end))
            self.snippet = "\n".join(
                f"{'>' if number == self.line else ' '} {number:>{width}} | {line}"
                for number, line in enumerate(lines[start - 1:end], start)
            )
        return self

    def __str__(self) -> str:
        if self.message:
            text = self.message
        elif self.err is not None:
            text = str(self.err)
        else:
            text = "failed to decode Taskfile"
        parts = []
        if self.location:
            parts.append(f"file:  {self.location}")
        parts.append(f"err:   {text}")
        parts.append(f"line:  {self.line}")
        parts.append(f"col:   {self.column}")
        if self.snippet:
            parts.append(self.snippet)
        return "\n".join(parts)


class TaskfileInvalidError(TaskfileError):
    """A Taskfile could not be parsed."""

    def __init__(self, uri: str, err: Any) -> None:
        self.uri = uri
        self.err = err
        super().__init__(f"task: Failed to parse {uri}:\n{err}")


class TaskfileNotFoundError(TaskfileError):
    """No Taskfile exists at the given location."""

    def __init__(self, uri: str, walk: bool = False) -> None:
        self.uri = uri
        self.walk = walk
        walk_text = " (or any of the parent directories)" if walk else ""
        super().__init__(f'task: No Taskfile found at "{uri}"{walk_text}')


class TaskfileNotSecureError(TaskfileError):
    """A remote Taskfile was requested over an insecure connection."""

    def __init__(self, uri: str) -> None:
        self.uri = uri
        super().__init__(
            f'task: Taskfile "{uri}" cannot be downloaded over an insecure connection. '
            "You can override this by using the --insecure flag"
        )


class TaskfileFetchFailedError(TaskfileError):
    """Downloading a remote Taskfile failed."""

    def __init__(self, uri: str, http_status_code: int = 0) -> None:
        self.uri = uri
        self.http_status_code = http_status_code
        if http_status_code:
            message = f'task: Download of "{uri}" failed with status code: {http_status_code}'
        else:
            message = f'task: Download of "{uri}" failed'
        super().__init__(message)


class TaskfileNetworkTimeoutError(TaskfileError):
    """Downloading a remote Taskfile timed out."""

    def __init__(self, uri: str = "", timeout: float = 0.0, checked_cache: bool = False) -> None:
        self.uri = uri
        self.timeout = timeout
        self.checked_cache = checked_cache
        cache_text = " and no offline copy was found in the cache" if checked_cache else ""
        super().__init__(
            f"task: Network connection timed out after {_format_timeout(timeout)} "
            f'while attempting to download Taskfile "{uri}"{cache_text}'
        )


class TaskfileCacheNotFoundError(TaskfileError):
    """Offline mode was requested but no cached copy exists."""

    def __init__(self, uri: str) -> None:
        self.uri = uri
        super().__init__(
            f'task: Taskfile "{uri}" was not found in the cache. '
            "Remove the --offline flag to use a remote copy or download it using the --download flag"
        )


class TaskfileNotTrustedError(TaskfileError):
    """The user declined to trust a remote Taskfile."""

    def __init__(self, uri: str) -> None:
        self.uri = uri
        super().__init__(f'task: Taskfile "{uri}" not trusted by user')


class TaskfileVersionCheckError(TaskfileError):
    """A Taskfile has no schema version."""

    def __init__(self, uri: str) -> None:
        self.uri = uri
        super().__init__(f'task: Missing schema version in Taskfile "{uri}"')


class TaskfileCycleError(TaskfileError):
    """Including one Taskfile from another would create a cycle."""

    def __init__(self, source: str, destination: str) -> None:
        self.source = source
        self.destination = destination
        super().__init__(f"task: include cycle detected between {source} <--> {destination}")


class TaskNameFlattenConflictError(TaskfileError):
    """Two tasks end up with the same name after an include."""

    def __init__(self, task_name: str, include: str) -> None:
        self.task_name = task_name
        self.include = include
        super().__init__(f'task: Found multiple tasks ({task_name}) included by "{include}"')