"""
Signing module - Signing key pairs.

This module handles:
- Ed25519 key pair generation
- Passphrase protection of the private key
- Key files
"""
