"""
Persisted SDK location store.

The resolved SDK path is recorded in ``local.properties`` at the build
root, the same file Android build tooling reads ``sdk.dir`` from. The file
is Java properties text, so it may also carry unrelated keys written by
other tools; those are always preserved.

Example:
    >>> from pathlib import Path
    >>> from androidsdkkit.core.properties import LocalProperties
    >>>
    >>> props = LocalProperties(Path('/path/to/project'))
    >>> props.sdk_dir()
    '/home/me/.android-sdk'
"""

import logging
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple

from androidsdkkit.core.filesystem import atomic_write

logger = logging.getLogger(__name__)

LOCAL_PROPERTIES_FILE = "local.properties"
SDK_DIR_PROPERTY = "sdk.dir"
HEADER_COMMENT = "# DO NOT check this file into source control.\n"

_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_SEPARATORS = "=:"
_WHITESPACE = " \t\f"


def _ends_with_continuation(line: str) -> bool:
    """A line continues when it ends with an odd number of backslashes."""
    trailing = len(line) - len(line.rstrip("\\"))
    return trailing % 2 == 1


def _logical_lines(physical: List[str]) -> Iterator[Tuple[List[str], Optional[str]]]:
    """
    Group physical lines into logical properties lines.

    Yields:
        (physical lines of the group, logical text) where logical text is
        None for blank lines and comments
    """
    index = 0
    while index < len(physical):
        group = [physical[index]]
        text = physical[index].rstrip("\r\n").lstrip(_WHITESPACE)
        index += 1

        if not text or text[0] in "#!":
            yield group, None
            continue

        while _ends_with_continuation(text) and index < len(physical):
            group.append(physical[index])
            text = text[:-1] + physical[index].rstrip("\r\n").lstrip(_WHITESPACE)
            index += 1

        yield group, text


def _unescape(text: str) -> str:
    """Undo Java properties escapes (``\\\\``, ``\\:``, ``\\uXXXX`` ...)."""
    result = []
    index = 0
    while index < len(text):
        char = text[index]
        if char != "\\" or index + 1 >= len(text):
            result.append(char)
            index += 1
            continue

        escaped = text[index + 1]
        if escaped == "u" and index + 6 <= len(text):
            try:
                result.append(chr(int(text[index + 2 : index + 6], 16)))
                index += 6
                continue
            except ValueError:
                pass
        result.append(_ESCAPES.get(escaped, escaped))
        index += 2
    return "".join(result)


def _split_key_value(text: str) -> Tuple[str, str]:
    """Split a logical line at the first unescaped separator."""
    index = 0
    while index < len(text):
        char = text[index]
        if char == "\\":
            index += 2
            continue
        if char in _SEPARATORS or char in _WHITESPACE:
            break
        index += 1

    key = text[:index]
    rest = text[index:].lstrip(_WHITESPACE)
    if rest and rest[0] in _SEPARATORS:
        rest = rest[1:].lstrip(_WHITESPACE)
    return _unescape(key), _unescape(rest)


def parse_properties(content: str) -> Dict[str, str]:
    """
    Parse Java properties text.

    Duplicate keys resolve to the last occurrence.

    Args:
        content: Properties file content

    Returns:
        Mapping of key to value
    """
    properties: Dict[str, str] = {}
    for _, text in _logical_lines(content.splitlines(keepends=True)):
        if text is None:
            continue
        key, value = _split_key_value(text)
        properties[key] = value
    return properties


class LocalProperties:
    """
    Reads and updates the ``local.properties`` file of a build root.

    Attributes:
        path: Path to local.properties
    """

    def __init__(self, build_root: Path):
        self.path = Path(build_root) / LOCAL_PROPERTIES_FILE

    def exists(self) -> bool:
        return self.path.is_file()

    def read(self) -> Dict[str, str]:
        """
        Read all properties.

        Returns:
            Mapping of key to value (empty if the file does not exist)
        """
        if not self.exists():
            return {}
        return parse_properties(self.path.read_text(encoding="utf-8"))

    def get(self, key: str) -> Optional[str]:
        return self.read().get(key)

    def sdk_dir(self) -> Optional[str]:
        """Return the recorded SDK directory, or None when not recorded."""
        return self.get(SDK_DIR_PROPERTY)

    def escape_path(self, path: str) -> str:
        """
        Escape backslashes for properties text.

        Backslashes are Windows separators and ordinary characters on POSIX;
        either way they must be doubled to read back unchanged.
        """
        return path.replace("\\", "\\\\")

    def write_sdk_dir(self, path: str) -> None:
        """
        Record the SDK directory.

        A missing file is created with a provenance comment. An existing
        file keeps every unrelated line; any previous ``sdk.dir`` entry is
        dropped and a single new one is appended.

        Args:
            path: SDK directory to record
        """
        line = f"{SDK_DIR_PROPERTY}={self.escape_path(str(path))}\n"

        if not self.exists():
            logger.debug(f"Creating {self.path} with {SDK_DIR_PROPERTY}")
            atomic_write(self.path, HEADER_COMMENT + line)
            return

        physical = self.path.read_text(encoding="utf-8").splitlines(keepends=True)
        kept: List[str] = []
        for group, text in _logical_lines(physical):
            if text is not None and _split_key_value(text)[0] == SDK_DIR_PROPERTY:
                logger.debug(f"Replacing stale {SDK_DIR_PROPERTY} entry in {self.path}")
                continue
            kept.extend(group)

        if kept and not kept[-1].endswith(("\n", "\r")):
            kept[-1] += "\n"

        logger.debug(f"Appending {SDK_DIR_PROPERTY} to {self.path}")
        atomic_write(self.path, "".join(kept) + line)
