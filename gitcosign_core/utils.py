"""
gitcosign_core.utils
--------------------
Small helpers shared across the package: base64 utilities, line wrapping,
git object id hashing and environment flag parsing.
"""

from __future__ import annotations
import base64, binascii, os
from typing import List, Optional
from cryptography.hazmat.primitives import hashes

_OBJECT_HASHES = {
    "sha1": hashes.SHA1,
    "sha256": hashes.SHA256,
}


def b64e(b: bytes) -> str:
    return base64.b64encode(b).decode("ascii")


def b64d(s: str) -> bytes:
    # strict: stray characters are an error, not silently dropped
    return base64.b64decode(s.encode("ascii"), validate=True)


def wrap(s: str, width: int) -> List[str]:
    return [s[i:i + width] for i in range(0, len(s), width)]


def git_object_id(raw: bytes, obj_type: str = "commit", object_format: str = "sha1") -> str:
    """
    Compute the id git assigns to an object: the hex digest of
    ``"<type> <size>\\0" + content`` under the repository's object format.
    """
    try:
        algorithm = _OBJECT_HASHES[object_format]()
    except KeyError:
        raise ValueError(f"Unknown object format: {object_format}")
    h = hashes.Hash(algorithm)
    h.update(f"{obj_type} {len(raw)}".encode("ascii") + b"\0")
    h.update(raw)
    return binascii.hexlify(h.finalize()).decode("ascii")


def env_flag(name: str, default: bool = False) -> bool:
    value: Optional[str] = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")
