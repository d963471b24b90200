"""Binary candidate filter: decide which package files go to linkage inspection."""

from __future__ import annotations

from pathlib import Path

from linkage_audit.tooling.base import Toolchain

# Extensions that never carry dynamically linked code. Matching is
# case-sensitive on the text after the last dot; ".so" is deliberately absent.
NON_BINARY_EXTENSIONS: frozenset[str] = frozenset(
    {
        # archives and compressed data
        "a", "la", "gz", "xz", "bz2", "zst", "zip", "tar",
        # images
        "png", "gif", "jpg", "jpeg", "bmp", "xcf", "svg", "rgb", "ico", "xpm",
        # fonts
        "ttf", "otf", "woff", "woff2",
        # markup, text and sources
        "html", "htm", "css", "xml", "txt", "md", "rst", "json",
        "h", "hpp", "c", "cxx", "cpp",
        # scripts
        "rb", "py", "pyc", "lua", "pl", "sh", "js",
        # configuration
        "config", "cfg", "conf", "desktop", "ini", "yaml", "yml",
        # audio and video
        "wav", "ogg", "ogv", "avi", "opus", "mp3", "mp4", "flac", "mkv", "webm",
        # documentation and translations
        "pdf", "po", "mo",
    }
)


def file_extension(path: str) -> str | None:
    """Text after the last dot of the file name, or None if there is none."""
    suffix = Path(path).suffix
    return suffix[1:] if suffix else None


def might_be_binary(path: str) -> bool:
    """Cheap pre-filter: an existing regular file without a known non-binary extension."""
    if not Path(path).is_file():
        return False
    return file_extension(path) not in NON_BINARY_EXTENSIONS


def is_binary_candidate(path: str, toolchain: Toolchain) -> bool:
    """Pre-filter, then confirm with the toolchain's file-type probe."""
    return might_be_binary(path) and toolchain.probe_file_type(path)
