"""Text conversion at the collaborator boundaries.

Everything inside the core (file paths, log lines) is ``str``. Collaborators
may hand back ``bytes`` in whatever encoding the host uses; those values are
decoded here, and only here.
"""

import locale
import os


def host_encoding() -> str:
    """Encoding used for byte strings coming from host collaborators."""
    return locale.getpreferredencoding(False) or "utf-8"


def to_text(value) -> str:
    """
    Convert a collaborator value to the canonical text representation.

    Args:
        value: ``str``, ``bytes``/``bytearray`` or ``os.PathLike``

    Returns:
        Decoded text. Undecodable bytes are replaced, never raised on.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode(host_encoding(), errors="replace")
    if isinstance(value, os.PathLike):
        return os.fsdecode(os.fspath(value))
    return str(value)


def to_path_text(value) -> str:
    """Decode a raw path entry the way the file system encodes names."""
    if isinstance(value, (bytes, bytearray)):
        return os.fsdecode(bytes(value))
    return to_text(value)


def to_native_path(path: str) -> str:
    """Representation of a file path handed to the patcher."""
    return os.fspath(path)
