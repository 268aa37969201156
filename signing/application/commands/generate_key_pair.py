"""
GenerateKeyPairCommand.

Command to create a signing key pair and write it to disk.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from core.domain.value_objects import Passphrase


@dataclass
class GenerateKeyPairCommand:
    """Command to generate a key pair protected by a passphrase."""

    public_key_path: Path
    private_key_path: Path
    passphrase: Union[Passphrase, str] = field(repr=False)
    confirmation: Optional[Union[Passphrase, str]] = field(default=None, repr=False)
