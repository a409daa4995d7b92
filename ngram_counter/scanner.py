"""
Corpus discovery: recursive directory walk filtered by file extension.
"""

import logging
from pathlib import Path
from typing import Callable, List, Union

logger = logging.getLogger(__name__)


def is_text_file(extension: str) -> bool:
    return extension == ".txt"


def find_all_files(
    root: Union[str, Path], predicate: Callable[[str], bool] = is_text_file
) -> List[Path]:
    """Return every regular file under root whose suffix satisfies predicate.

    The list is sorted so the corpus order is stable between runs.
    """
    root = Path(root)
    if not root.is_dir():
        logger.warning(f"Data directory {root} does not exist or is not a directory")
        return []

    files = sorted(
        path for path in root.rglob("*") if path.is_file() and predicate(path.suffix)
    )
    logger.info(f"Found {len(files)} files to process under {root}")
    return files
