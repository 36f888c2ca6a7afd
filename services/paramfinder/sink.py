"""
Output sink - Write URLs to a text file, one per line.
"""

from pathlib import Path
from typing import Iterable, Union

from loguru import logger


def save_urls(urls: Iterable[str], path: Union[str, Path]) -> int:
    """
    Write URLs to a file, creating or truncating it.

    The file is UTF-8 with a "\\n" after every URL. No temp file or rename:
    a failed write can leave a partial file behind.

    Returns:
        Number of lines written

    Raises:
        OSError: File could not be opened, written or flushed
    """
    count = 0
    with open(path, "w", encoding="utf-8", newline="\n") as f:
        for url in urls:
            f.write(url)
            f.write("\n")
            count += 1
        f.flush()

    logger.debug(f"Wrote {count} lines to {path}")
    return count
