"""
gitcosign Core Package
======================
Co-signing and multi-keyring review of git commit objects.

Provides:
- Byte-exact commit object model (parse, signable payload, signature splice)
- OpenPGP ASCII armor codec with CRC-24
- gpg status transcript parsing and the multi-keyring quorum validator
- git / gpg subprocess backends and the ``gitcosign`` CLI
"""

__version__ = "0.1.0"
