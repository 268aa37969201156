"""
License file storage.

License files are UTF-8 without a byte order mark; XML parsers that do not
expect a BOM reject the document otherwise.
"""
import logging
import os
from pathlib import Path
from typing import Union

from core.domain.exceptions import MalformedDocument

logger = logging.getLogger(__name__)

LICENSE_FILE_SUFFIX = ".lic"


def write_license_file(path: Union[str, Path], document: str) -> Path:
    """
    Write a license document atomically.

    The document goes to a temporary sibling first and is renamed into
    place, so a failed write leaves no partial file behind.

    Args:
        path: Destination path (".lic" appended when missing)
        document: Serialized license document

    Returns:
        Path written
    """
    path = Path(path)
    if path.suffix != LICENSE_FILE_SUFFIX:
        path = path.with_name(path.name + LICENSE_FILE_SUFFIX)

    temporary = path.with_name(path.name + ".tmp")
    try:
        temporary.write_bytes(document.encode("utf-8"))
        os.replace(temporary, path)
    finally:
        if temporary.exists():
            temporary.unlink()

    logger.info("Wrote license file %s", path)
    return path


def read_license_file(path: Union[str, Path]) -> str:
    """
    Read a license document.

    Args:
        path: License file path

    Returns:
        Document text

    Raises:
        MalformedDocument: If the file is not UTF-8
    """
    try:
        return Path(path).read_bytes().decode("utf-8")
    except UnicodeDecodeError as e:
        raise MalformedDocument(f"License file {path} is not UTF-8 text") from e
