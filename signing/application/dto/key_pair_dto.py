"""
Key pair DTOs for command output.
"""
from dataclasses import dataclass
from pathlib import Path


@dataclass
class GenerateKeyPairResponseDTO:
    """DTO for generate key pair result."""

    public_key_path: Path
    private_key_path: Path
    public_key: str
