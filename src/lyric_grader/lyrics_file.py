"""Load lyrics from ``.txt`` and ``.lrc`` files."""

from pathlib import Path
import re

from lyric_grader.errors import InputError

SUPPORTED_SUFFIXES = (".txt", ".lrc")

# LRC line timestamp such as [00:12.34] or [01:02:03]
LRC_TIMESTAMP = re.compile(r"\[\d+:\d+(?:[.:]\d+)?\]")
# LRC metadata tag such as [ar:Artist] or [length: 03:20]
LRC_METADATA = re.compile(r"^\[[a-zA-Z#]+:.*\]$")


def parse_lrc(content: str) -> str:
    """Strip LRC timestamps and metadata tags, keeping section markers."""
    lines = []
    for line in content.splitlines():
        stripped = line.strip()
        if LRC_METADATA.match(stripped):
            continue
        text = LRC_TIMESTAMP.sub("", stripped).strip()
        if text:
            lines.append(text)
    return "\n".join(lines)


def parse_txt(content: str) -> str:
    """Trim lines, keeping single blank lines between stanzas."""
    lines = [line.strip() for line in content.splitlines()]
    text = "\n".join(lines)
    return re.sub(r"\n{3,}", "\n\n", text).strip()


def load_lyrics_file(path: Path) -> str:
    """Read a lyrics file.

    Args:
        path: A ``.txt`` or ``.lrc`` file.

    Returns:
        Lyric text with one lyric line per line.

    Raises:
        InputError: If the file cannot be read or has an unsupported suffix.
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise InputError(
            f"Unsupported lyrics file {path.name}: expected one of {', '.join(SUPPORTED_SUFFIXES)}"
        )

    try:
        with open(path, encoding="utf-8") as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise InputError(f"Cannot read lyrics file {path}: {e}") from e

    if suffix == ".lrc":
        return parse_lrc(content)
    return parse_txt(content)
