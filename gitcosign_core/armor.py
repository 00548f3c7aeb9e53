"""
gitcosign_core.armor
--------------------
OpenPGP ASCII armor (RFC 4880 §6) for detached signature blocks.

- crc24():    the armor checksum
- enarmor():  raw packets -> armored text
- dearmor():  armored text -> raw packets
"""

from __future__ import annotations
import binascii, re
from typing import List, Optional, Union
from .errors import ArmorChecksumError, ArmorFormatError
from .utils import b64d, b64e, wrap

SIGNATURE_BLOCK = "PGP SIGNATURE"
LINE_WIDTH = 64

CRC24_INIT = 0xB704CE
CRC24_POLY = 0x1864CFB

_BEGIN_RE = re.compile(r"^-----BEGIN (.+)-----$")
_END_RE = re.compile(r"^-----END (.+)-----$")


def crc24(data: bytes) -> bytes:
    crc = CRC24_INIT
    for byte in data:
        crc ^= byte << 16
        for _ in range(8):
            crc <<= 1
            if crc & 0x1000000:
                crc ^= CRC24_POLY
        crc &= 0xFFFFFF
    return crc.to_bytes(3, "big")


def enarmor(raw: bytes, block_type: str = SIGNATURE_BLOCK) -> str:
    lines = [f"-----BEGIN {block_type}-----", ""]
    lines += wrap(b64e(raw), LINE_WIDTH)
    lines.append("=" + b64e(crc24(raw)))
    lines.append(f"-----END {block_type}-----")
    return "\n".join(lines) + "\n"


def dearmor(text: Union[str, bytes], verify_checksum: bool = False) -> bytes:
    """
    Decode one armored block.

    The checksum line is stripped but only compared against the decoded data
    when ``verify_checksum`` is set.
    """
    if isinstance(text, bytes):
        try:
            text = text.decode("ascii")
        except UnicodeDecodeError as e:
            raise ArmorFormatError(f"armor is not ASCII: {e}")

    lines = [line.rstrip("\r") for line in text.strip().split("\n")]
    if len(lines) < 2:
        raise ArmorFormatError("armor block too short")

    begin = _BEGIN_RE.match(lines[0])
    end = _END_RE.match(lines[-1])
    if not begin:
        raise ArmorFormatError(f"missing BEGIN line: {lines[0]!r}")
    if not end:
        raise ArmorFormatError(f"missing END line: {lines[-1]!r}")
    if begin.group(1) != end.group(1):
        raise ArmorFormatError(
            f"armor type mismatch: BEGIN {begin.group(1)!r} / END {end.group(1)!r}"
        )

    body: List[str] = lines[1:-1]
    if "" in body:
        # drop the "Key: value" header block and the blank line closing it
        body = body[body.index("") + 1:]

    checksum: Optional[str] = None
    if body and body[-1].startswith("="):
        checksum = body.pop()[1:]

    try:
        raw = b64d("".join(line.strip() for line in body))
    except (binascii.Error, UnicodeEncodeError) as e:
        raise ArmorFormatError(f"invalid base64 in armor body: {e}")

    if verify_checksum and checksum is not None:
        try:
            expected = b64d(checksum)
        except (binascii.Error, UnicodeEncodeError) as e:
            raise ArmorFormatError(f"invalid armor checksum line: {e}")
        if expected != crc24(raw):
            raise ArmorChecksumError("armor checksum does not match content")

    return raw
