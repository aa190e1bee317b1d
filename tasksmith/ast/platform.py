"""Operating system and architecture restrictions."""

from __future__ import annotations

from dataclasses import dataclass, replace

import yaml

from tasksmith.ast.decoding import scalar_text
from tasksmith.errors import TaskfileDecodeError

KNOWN_OS = frozenset(
    {
        "aix", "android", "darwin", "dragonfly", "freebsd", "hurd", "illumos", "ios",
        "js", "linux", "nacl", "netbsd", "openbsd", "plan9", "solaris", "wasip1",
        "windows", "zos",
    }
)
KNOWN_ARCH = frozenset(
    {
        "386", "amd64", "amd64p32", "arm", "armbe", "arm64", "arm64be", "loong64",
        "mips", "mipsle", "mips64", "mips64le", "mips64p32", "mips64p32le", "ppc",
        "ppc64", "ppc64le", "riscv", "riscv64", "s390", "s390x", "sparc", "sparc64",
        "wasm",
    }
)


class InvalidPlatformError(ValueError):
    """A platform string is not an OS, an architecture or an OS/architecture pair."""

    def __init__(self, platform: str) -> None:
        self.platform = platform
        super().__init__(f'invalid platform "{platform}"')


@dataclass
class Platform:
    """An operating system, an architecture, or both."""

    os: str = ""
    arch: str = ""

    @classmethod
    def parse(cls, text: str) -> Platform:
        """Parse ``OS``, ``Arch`` or ``OS/Arch``."""
        parts = text.split("/")
        if len(parts) > 2:
            raise InvalidPlatformError(text)
        platform = cls()
        try:
            platform._set_os_or_arch(parts[0])
            if len(parts) == 2:
                platform._set_arch(parts[1])
        except ValueError as err:
            raise InvalidPlatformError(text) from err
        return platform

    @classmethod
    def from_node(cls, node: yaml.Node) -> Platform:
        """Decode a platform from a scalar node."""
        if isinstance(node, yaml.ScalarNode):
            text = scalar_text(node)
            try:
                return cls.parse(text)
            except InvalidPlatformError as err:
                raise TaskfileDecodeError(err, node) from err
        raise TaskfileDecodeError(None, node).with_type_message("platform")

    def deep_copy(self) -> Platform:
        """Return an independent copy."""
        return replace(self)

    def _set_os_or_arch(self, value: str) -> None:
        if not value:
            raise ValueError("task: Blank OS/Arch value provided")
        if value in KNOWN_OS:
            self.os = value
        elif value in KNOWN_ARCH:
            self.arch = value
        else:
            raise ValueError(f"task: Invalid OS/Arch value provided ({value})")

    def _set_arch(self, value: str) -> None:
        if not value:
            raise ValueError("task: Blank Arch value provided")
        if self.arch:
            raise ValueError("task: Multiple Arch values provided")
        if value not in KNOWN_ARCH:
            raise ValueError(f"task: Invalid Arch value provided ({value})")
        self.arch = value