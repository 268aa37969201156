"""
IssueLicenseCommand.

Command to sign a license, write it to a file and optionally register it.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from activations.application.commands.register_license import RegisterLicenseCommand
from core.domain.value_objects import Passphrase
from licenses.domain.license import LicenseFields


@dataclass
class IssueLicenseCommand:
    """
    Command to issue a license.

    When registration is given, the license signature is filled in after
    signing and the license is registered with the activation server.
    """

    fields: LicenseFields
    encrypted_private_key: Optional[bytes]
    passphrase: Union[Passphrase, str] = field(repr=False)
    output_path: Path
    registration: Optional[RegisterLicenseCommand] = None
