"""
RegisterLicenseCommand.

Command to register an issued license with the activation server.
"""

from dataclasses import dataclass, field


@dataclass
class RegisterLicenseCommand:
    """
    Command to register a license signature and install policy.

    signature may be left empty while the license is not signed yet;
    it is required by the time the command is handled.
    """

    server_url: str
    username: str
    password: str = field(repr=False)
    install_limit: int = 0
    unlimited_installs: bool = False
    signature: bytes = b""
