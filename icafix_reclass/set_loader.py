"""
Classification list loading.

FIX and the manual reviewer both record components as whitespace
separated 1-based indices, e.g. ``1 4 7 12``. A missing or empty file is
an empty list: the manual ReclassifyAs* files are often left empty when
nothing needed changing.
"""

import logging
from pathlib import Path
from typing import FrozenSet, Optional, Union

from .errors import ClassificationReadError, MalformedClassificationError

logger = logging.getLogger(__name__)

ClassificationSet = FrozenSet[int]


def parse_classification_set(
    text: Optional[str],
    source: Optional[str] = None
) -> ClassificationSet:
    """
    Parse a whitespace separated list of component indices.

    Args:
        text: Raw file contents (None is treated as empty)
        source: Name used in error messages (usually the file path)

    Returns:
        Frozen set of component indices

    Raises:
        MalformedClassificationError: If any token is not a positive integer
    """
    if not text:
        return frozenset()

    indices = set()
    for position, token in enumerate(text.split(), start=1):
        # int() would also accept "+3" and "1_0"; component lists are plain digits
        if not (token.isascii() and token.isdigit()):
            raise MalformedClassificationError(token, position, source)
        index = int(token)
        if index < 1:
            raise MalformedClassificationError(token, position, source)
        indices.add(index)

    return frozenset(indices)


def load_classification_file(path: Union[str, Path]) -> ClassificationSet:
    """
    Load a classification list from disk.

    A file that does not exist yields an empty set.

    Raises:
        ClassificationReadError: If the file cannot be read or is not UTF-8 text
        MalformedClassificationError: If any token is not a positive integer
    """
    path = Path(path)
    if not path.exists():
        logger.info(f"Classification list not found, treating as empty: {path}")
        return frozenset()

    try:
        with open(path, 'r', encoding='utf-8') as f:
            text = f.read()
    except UnicodeDecodeError as e:
        raise ClassificationReadError(path, f"not a text file (byte {e.start}: {e.reason})") from e
    except OSError as e:
        raise ClassificationReadError(path, e.strerror or str(e)) from e

    indices = parse_classification_set(text, source=str(path))
    logger.debug(f"Loaded {len(indices)} components from {path}")
    return indices
