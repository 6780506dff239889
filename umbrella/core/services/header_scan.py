"""
Header scan — derive include directives from the header files on disk.

    <includes_dir>/.../openssl/ssl.h   →   #import <openssl/ssl.h>

The include path starts at the last directory segment equal to the
namespace, looking no higher than the scan root itself. Headers outside
any namespace directory produce nothing.
The result is only used to detect drift from the static list, never
to build the umbrella header itself.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path, PurePath, PurePosixPath

from umbrella.core.errors import InvalidInputError

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "openssl"
DEFAULT_EXTENSION = ".h"
DEFAULT_DIRECTIVE = "#import"


def format_directive(include_path: str, directive: str = DEFAULT_DIRECTIVE) -> str:
    """``openssl/ssl.h`` → ``#import <openssl/ssl.h>``."""
    return f"{directive} <{include_path}>"


def directive_for(
    path: PurePath,
    namespace: str = DEFAULT_NAMESPACE,
    directive: str = DEFAULT_DIRECTIVE,
) -> str | None:
    """Convert one header path into an include directive.

    Returns:
        The directive, or None when no directory segment of ``path``
        equals ``namespace``.
    """
    parts = path.parts
    # Last matching directory wins; the file name itself never counts.
    for index in range(len(parts) - 2, -1, -1):
        if parts[index] == namespace:
            return format_directive("/".join(parts[index:]), directive)
    return None


def scan(
    directory: Path,
    namespace: str = DEFAULT_NAMESPACE,
    extension: str = DEFAULT_EXTENSION,
    directive: str = DEFAULT_DIRECTIVE,
) -> list[str]:
    """Scan ``directory`` recursively for headers and build their directives.

    Duplicates (the same include path found in two subtrees) are kept.

    Args:
        directory: Root to scan. Must be an existing, readable directory.
        namespace: Directory segment the include path starts at.
        extension: File name suffix of header files.
        directive: Include keyword (``#import`` or ``#include``).

    Returns:
        One directive per matching header, in no guaranteed order.

    Raises:
        InvalidInputError: ``directory`` is missing, not a directory,
            or not readable.
    """
    if not directory.is_dir():
        raise InvalidInputError(f'Includes directory "{directory}" must exist and be a directory.')
    if not os.access(directory, os.R_OK | os.X_OK):
        raise InvalidInputError(f'Includes directory "{directory}" is not readable.')

    root = directory.absolute()
    # Only the scan root and what lies below it can supply the namespace.
    base = PurePosixPath(root.name)
    directives: list[str] = []
    skipped = 0

    for header in sorted(root.rglob(f"*{extension}")):
        if not header.is_file():
            continue
        entry = directive_for(base.joinpath(*header.relative_to(root).parts), namespace, directive)
        if entry is None:
            skipped += 1
            logger.debug("Skipping %s (no '%s' directory)", header, namespace)
            continue
        directives.append(entry)

    logger.info(
        "Scanned %d header(s) under %s (%d outside '%s')",
        len(directives),
        directory,
        skipped,
        namespace,
    )
    return directives
