"""
gitcosign_core.commit
---------------------
Byte-exact model of a git commit object.

A commit is a block of ``name value`` header lines (continuation lines start
with a single space), one empty line, then the message. The parser records
where the ``gpgsig`` header sits in the raw stream so that the signature can
be cut out (signable payload) or replaced (signing) without touching any
other byte.

Guarantees:
- reconstruct(parse_commit(x)) == x
- splice_signature(c, c.signature) == c.raw for a signed commit c
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union
from .errors import CommitParseError

SIGNATURE_HEADER = b"gpgsig"

Header = Tuple[bytes, bytes]


@dataclass(frozen=True)
class CommitObject:
    headers: List[Header]
    message: bytes
    raw: bytes
    signature_range: Optional[Tuple[int, int]] = None  # [start, end) into raw
    signature_anchor: int = 0                          # insertion point in the signable payload

    def header(self, name: bytes) -> Optional[bytes]:
        for key, value in self.headers:
            if key == name:
                return value
        return None

    def header_values(self, name: bytes) -> List[bytes]:
        return [value for key, value in self.headers if key == name]

    @property
    def signature(self) -> Optional[bytes]:
        """Folded ``gpgsig`` value (armored text without the continuation spaces)."""
        return self.header(SIGNATURE_HEADER)

    @property
    def is_signed(self) -> bool:
        return self.signature_range is not None

    def to_bytes(self) -> bytes:
        return reconstruct(self)


def parse_commit(raw: bytes) -> CommitObject:
    headers: List[Header] = []
    sig_start = -1
    sig_end = -1
    pos = 0

    while True:
        eol = raw.find(b"\n", pos)
        if eol == -1:
            raise CommitParseError("header block not terminated by an empty line", pos, raw[pos:pos + 80])
        line = raw[pos:eol]

        if not line:
            if sig_start >= 0 and sig_end < sig_start:
                # gpgsig was the last header
                sig_end = pos
            message = raw[eol + 1:]
            anchor = sig_start if sig_start >= 0 else pos
            break

        if line[:1] == b" ":
            if not headers:
                raise CommitParseError("continuation without header", pos, line)
            name, value = headers[-1]
            headers[-1] = (name, value + b"\n" + line[1:])
        else:
            sep = line.find(b" ")
            if sep <= 0:
                raise CommitParseError("malformed header line", pos, line)
            name = line[:sep]
            headers.append((name, line[sep + 1:]))

            if name == SIGNATURE_HEADER and sig_start < 0:
                sig_start = pos
            elif sig_start >= 0 and sig_end < sig_start:
                sig_end = pos

        pos = eol + 1

    signature_range = (sig_start, sig_end) if sig_start >= 0 else None
    return CommitObject(
        headers=headers,
        message=message,
        raw=raw,
        signature_range=signature_range,
        signature_anchor=anchor,
    )


def fold_header(name: bytes, value: bytes) -> bytes:
    return name + b" " + value.replace(b"\n", b"\n ") + b"\n"


def reconstruct(commit: CommitObject) -> bytes:
    out = [fold_header(name, value) for name, value in commit.headers]
    out.append(b"\n")
    out.append(commit.message)
    return b"".join(out)


def signable_payload(commit: CommitObject) -> bytes:
    if commit.signature_range is None:
        return commit.raw
    start, end = commit.signature_range
    return commit.raw[:start] + commit.raw[end:]


def splice_signature(commit: CommitObject, armored: Union[str, bytes]) -> bytes:
    """
    Insert ``armored`` as the commit's ``gpgsig`` header, replacing any
    existing one. The value is folded as given; a trailing newline becomes an
    empty continuation line.
    """
    if isinstance(armored, str):
        armored = armored.encode("ascii")

    payload = signable_payload(commit)
    at = commit.signature_anchor
    return payload[:at] + fold_header(SIGNATURE_HEADER, armored) + payload[at:]
