"""
Key file storage.

Public keys live in `.public_key` files, encrypted private keys in
`.private_key` files. Both hold a single ASCII line.
"""
import logging
import os
from pathlib import Path
from typing import Union

from signing.domain.key_pair import ExportedKeyPair

logger = logging.getLogger(__name__)

PUBLIC_KEY_SUFFIX = ".public_key"
PRIVATE_KEY_SUFFIX = ".private_key"

PathLike = Union[str, Path]


def ensure_suffix(path: PathLike, suffix: str) -> Path:
    """Append suffix to path unless it already ends with it."""
    path = Path(path)
    if path.suffix != suffix:
        path = path.with_name(path.name + suffix)
    return path


def _write_atomically(path: Path, data: bytes) -> None:
    temporary = path.with_name(path.name + ".tmp")
    try:
        temporary.write_bytes(data)
        os.replace(temporary, path)
    finally:
        if temporary.exists():
            temporary.unlink()


def write_key_pair(
    exported: ExportedKeyPair, public_key_path: PathLike, private_key_path: PathLike
) -> tuple[Path, Path]:
    """
    Write an exported key pair to its two files.

    Each file is written to a temporary sibling and renamed into place. If
    the private key cannot be written the public key file is removed again,
    so a failure never leaves half a key pair behind.

    Args:
        exported: Exported key pair
        public_key_path: Destination of the public key
        private_key_path: Destination of the encrypted private key

    Returns:
        Tuple of (public key path, private key path) as written
    """
    public_path = ensure_suffix(public_key_path, PUBLIC_KEY_SUFFIX)
    private_path = ensure_suffix(private_key_path, PRIVATE_KEY_SUFFIX)
    _write_atomically(public_path, exported.public_key)
    try:
        _write_atomically(private_path, exported.private_key)
    except OSError:
        public_path.unlink(missing_ok=True)
        raise
    logger.info("Wrote key pair to %s and %s", public_path, private_path)
    return public_path, private_path


def read_key(path: PathLike) -> bytes:
    """
    Read a public or private key file.

    Args:
        path: Key file path

    Returns:
        Key file content without surrounding whitespace
    """
    return Path(path).read_bytes().strip()
