"""
gitcosign_core.transcript
-------------------------
Parses the machine-readable status stream gpg/gpgv writes to ``--status-fd``
into one SignatureVerificationResult per signature packet.

The directives that matter:

    [GNUPG:] NEWSIG [<signer-uid>]
    [GNUPG:] VALIDSIG <fpr> <date> <sig-ts> <expire-ts> ...
    [GNUPG:] ERRSIG <keyid> <pkalgo> <hashalgo> <class> <sig-ts> <rc> <fpr>
    [GNUPG:] BADSIG <long-keyid> <user-id>
    [GNUPG:] KEY_CONSIDERED <fpr> <flags>   (precedes the result line)

Field positions are fixed by the gpg status protocol (doc/DETAILS).
"""

from __future__ import annotations
import re
from datetime import datetime, timezone
from typing import List, Optional
from .errors import TranscriptError
from .models import SignatureVerificationResult

STATUS_PREFIX = "[GNUPG:]"
NEWSIG = "NEWSIG"
VALIDSIG = "VALIDSIG"
ERRSIG = "ERRSIG"
BADSIG = "BADSIG"
KEY_CONSIDERED = "KEY_CONSIDERED"

# ERRSIG reason code for "no public key"
RC_NO_PUBKEY = "9"

_DIGITS = re.compile(r"^\d+$")


def parse_sig_timestamp(ts: str) -> Optional[datetime]:
    if ts == "0":
        return None
    if _DIGITS.match(ts):
        try:
            return datetime.fromtimestamp(int(ts), tz=timezone.utc)
        except (OverflowError, ValueError, OSError):
            raise TranscriptError(f"Unknown timestamp format: {ts} (out of range)")
    if "T" in ts:
        # gpg emits the ISO 8601 basic form, e.g. 20240131T235959
        try:
            return datetime.strptime(ts, "%Y%m%dT%H%M%S").replace(tzinfo=timezone.utc)
        except ValueError:
            pass
        try:
            parsed = datetime.fromisoformat(ts.replace("Z", "+00:00"))
        except ValueError:
            raise TranscriptError(f"Unknown timestamp format: {ts}")
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    raise TranscriptError(f"Unknown timestamp format: {ts}")


def _fields(line: str, minimum: int) -> List[str]:
    fields = line.split(" ")
    if len(fields) < minimum:
        raise TranscriptError(f"truncated status line: {line!r}")
    return fields


def _parse_validsig(line: str) -> SignatureVerificationResult:
    fields = _fields(line, 5)
    return SignatureVerificationResult(
        is_valid=True,
        is_missing_key=False,
        key_id=fields[1],
        timestamp=parse_sig_timestamp(fields[3]),
        expires=parse_sig_timestamp(fields[4]),
    )


def _parse_errsig(line: str) -> SignatureVerificationResult:
    fields = _fields(line, 7)
    # field 7 is the issuer fingerprint (same form VALIDSIG reports); older
    # gpg versions omit it or print "-"
    key_id = fields[7] if len(fields) > 7 and fields[7] not in ("", "-") else fields[1]
    return SignatureVerificationResult(
        is_valid=False,
        is_missing_key=fields[6] == RC_NO_PUBKEY,
        key_id=key_id,
        timestamp=parse_sig_timestamp(fields[5]),
    )


def _parse_badsig(line: str, fingerprint: Optional[str] = None) -> SignatureVerificationResult:
    # tampered payload: gpg reports BADSIG and no VALIDSIG. BADSIG carries the
    # long key id only; prefer the KEY_CONSIDERED fingerprint so the key is
    # reported under the same id VALIDSIG and ERRSIG use
    fields = _fields(line, 2)
    return SignatureVerificationResult(
        is_valid=False, is_missing_key=False, key_id=fingerprint or fields[1],
    )


def _directive(line: str) -> str:
    return line.split(" ", 1)[0]


def parse_transcript(text: str) -> List[SignatureVerificationResult]:
    lines = []  # (status line, fingerprint considered for this signature)
    considered = None
    for line in text.splitlines():
        if not line.startswith(STATUS_PREFIX + " "):
            continue
        line = line[len(STATUS_PREFIX) + 1:].rstrip()
        directive = _directive(line)
        if directive == NEWSIG:
            considered = None
        elif directive == KEY_CONSIDERED:
            fields = line.split(" ")
            if len(fields) > 1:
                considered = fields[1]
            continue
        if directive in (NEWSIG, VALIDSIG, ERRSIG, BADSIG):
            lines.append((line, considered))

    newsig_count = sum(1 for line, _ in lines if _directive(line) == NEWSIG)
    if newsig_count * 2 != len(lines):
        raise TranscriptError(
            f"unexpected result shape: {newsig_count} NEWSIG for {len(lines)} status lines"
        )

    results = []
    for line, fingerprint in lines:
        directive = _directive(line)
        if directive == VALIDSIG:
            results.append(_parse_validsig(line))
        elif directive == ERRSIG:
            results.append(_parse_errsig(line))
        elif directive == BADSIG:
            results.append(_parse_badsig(line, fingerprint))
    return results
