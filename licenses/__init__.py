"""
Licenses module - Signed license documents.

This module handles:
- License entity and domain logic
- Signing of license terms
- The XML license document format
- License issuing and verification
"""
