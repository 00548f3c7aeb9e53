"""
gitcosign_core.errors
---------------------
Exception hierarchy shared by the commit model, armor codec, transcript
parser, quorum validator and the subprocess backends.

An invalid signature or a missing public key is NOT an error: those are
verification outcomes and travel as data into the quorum validator.
"""

from __future__ import annotations
from typing import Optional, Sequence


class CosignError(Exception):
    pass


# --------- Parse errors (always fatal, never partially recovered) ----------
class ParseError(CosignError):
    pass


class CommitParseError(ParseError):
    def __init__(self, message: str, offset: Optional[int] = None, line: Optional[bytes] = None):
        self.offset = offset
        self.line = line
        if offset is not None:
            message = f"{message} at byte {offset}"
        if line is not None:
            message = f"{message}: {line!r}"
        super().__init__(message)


class ArmorFormatError(ParseError):
    pass


class ArmorChecksumError(ArmorFormatError):
    pass


class TranscriptError(ParseError):
    pass


# --------- Aggregation / configuration ----------
class ConsistencyError(CosignError):
    pass


class ConfigError(CosignError):
    pass


# --------- External processes (propagated as-is, no retry) ----------
class ExternalProcessError(CosignError):
    def __init__(self, message: str, command: Optional[Sequence[str]] = None,
                 returncode: Optional[int] = None, stderr: bytes = b""):
        super().__init__(message)
        self.command = list(command) if command else []
        self.returncode = returncode
        self.stderr = stderr


class ObjectNotFound(ExternalProcessError):
    pass


class SigningError(ExternalProcessError):
    pass


class VerifierError(ExternalProcessError):
    pass
