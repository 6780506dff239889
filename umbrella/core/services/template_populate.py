"""
Template population — substitute placeholders and write the header.

Recognised tokens:

    @GENERATED_CONTENT@   the static include list, verbatim
    @DATE@                full date of the run (``date`` command format)
    @YEAR@                four digit year of the run

Everything outside the tokens is copied byte for byte.
"""

from __future__ import annotations

import logging
import os
import re
import tempfile
from datetime import datetime
from pathlib import Path

from umbrella.core.errors import ConfigurationError, EmptyContentError
from umbrella.core.models.template import GeneratedFile

logger = logging.getLogger(__name__)

CONTENT_TOKEN = "@GENERATED_CONTENT@"
DATE_TOKEN = "@DATE@"
YEAR_TOKEN = "@YEAR@"

_TOKEN_RE = re.compile(r"@(GENERATED_CONTENT|DATE|YEAR)@")

# Mode applied to the written header (mkstemp creates 0600)
_OUTPUT_MODE = 0o644


def render_timestamp(now: datetime | None = None) -> tuple[str, str]:
    """Return ``(date, year)`` for the template.

    ``date`` looks like ``Sat Oct  3 12:00:00 UTC 2026``.
    """
    now = now or datetime.now().astimezone()
    parts = [
        now.strftime("%a %b"),
        f"{now.day:2d}",
        now.strftime("%H:%M:%S"),
        now.strftime("%Z"),
        now.strftime("%Y"),
    ]
    date = " ".join(part for part in parts if part)
    return date, f"{now.year:04d}"


def populate(template: str, content: str, date: str, year: str) -> str:
    """Replace every placeholder occurrence in ``template``.

    Substitution is a single pass, so the three replacements are independent
    of each other and replaced text is never scanned for tokens again.
    Tokens missing from the template are silently skipped.

    Raises:
        EmptyContentError: If ``content`` is empty.
    """
    if not content:
        raise EmptyContentError("Unexpectedly do not have content for the umbrella header.")

    values = {
        "GENERATED_CONTENT": content,
        "DATE": date,
        "YEAR": year,
    }
    return _TOKEN_RE.sub(lambda m: values[m.group(1)], template)


def read_template(path: Path) -> str:
    """Read the template without newline translation.

    Raises:
        ConfigurationError: If the file cannot be read.
    """
    try:
        with path.open("r", encoding="utf-8", newline="") as fh:
            return fh.read()
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f'Cannot read template "{path}": {e}') from e


def remove_stale(path: Path) -> bool:
    """Delete a previously generated file. Returns True if one existed."""
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    logger.debug("Removed stale %s", path)
    return True


def write_generated_file(file: GeneratedFile) -> Path:
    """Write ``file`` to disk.

    The existing destination is removed first, then the content goes to a
    uniquely named temp file in the same directory which is renamed into
    place. A failed write leaves no partial destination behind.

    Raises:
        OSError: If the file cannot be written.
    """
    path = file.path

    remove_stale(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(
        dir=path.parent,
        prefix=f".{path.name}.",
        suffix=".tmp",
    )
    tmp = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as fh:
            fh.write(file.content)
        os.chmod(tmp, _OUTPUT_MODE)
        os.replace(tmp, path)
    except Exception:
        tmp.unlink(missing_ok=True)
        raise

    logger.info("Wrote %s (%d bytes)%s", path, len(file.content), f" — {file.reason}" if file.reason else "")
    return path
