"""Reading and writing the changelog file.

The changelog file is the only durable artifact. A missing file is
treated as an empty scaffold so that commands can bootstrap it.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from changelog_py.core.document import ChangelogDocument
from changelog_py.exceptions import ChangelogFileError

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


def read_or_scaffold_text(path: Path) -> str:
    """Return the file contents, or the rendered scaffold if it is missing.

    Raises:
        ChangelogFileError: If the file exists but cannot be read as UTF-8
    """
    if not path.exists():
        logger.debug("%s does not exist, using scaffold", path)
        return ChangelogDocument.scaffold().to_markdown()

    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ChangelogFileError(f"{path} is not valid UTF-8: {e.reason} at byte {e.start}") from e
    except OSError as e:
        raise ChangelogFileError(f"cannot read {path}: {e.strerror or e}") from e


def load_or_scaffold(path: Path) -> ChangelogDocument:
    """Parse the changelog at path, or return a scaffold if it is missing.

    Raises:
        ChangelogFileError: If the file exists but cannot be read
        ChangelogParseError: If the file exists but cannot be parsed
    """
    return ChangelogDocument.parse(read_or_scaffold_text(path))


def write_changelog(path: Path, content: str) -> Path:
    """Write changelog text, creating parent directories as needed.

    Raises:
        ChangelogFileError: If the directory or file cannot be written
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise ChangelogFileError(f"cannot write {path}: {e.strerror or e}") from e
    logger.debug("Wrote %d bytes to %s", len(content), path)
    return path


def save_document(path: Path, document: ChangelogDocument) -> Path:
    return write_changelog(path, document.to_markdown())
