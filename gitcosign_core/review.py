"""
gitcosign_core.review
---------------------
Checks a commit's embedded signatures against every configured keyring and
folds the answers into one verdict.

Keyrings are checked concurrently. Results are collected in keyring order
(``Executor.map``) so that each keyring's result list stays positionally
aligned with the others before it reaches the quorum validator.
"""

from __future__ import annotations
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import List, Optional, Sequence
from .backends.base import ObjectStore, Verifier
from .commit import CommitObject, parse_commit, signable_payload
from .logger import get_logger
from .models import AggregatedSignatureStatus, KeyringRecord, KeyringResults
from .quorum import aggregate
from .transcript import parse_transcript

log = get_logger("gitcosign.review")


@dataclass
class ReviewReport:
    ref: str
    commit: CommitObject
    status: AggregatedSignatureStatus
    per_keyring: List[KeyringResults] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return self.status.valid

    def to_dict(self) -> dict:
        d = self.status.to_dict()
        d["ref"] = self.ref
        d["signed"] = self.commit.is_signed
        return d


def check_keyring(commit: CommitObject, verifier: Verifier, keyring: KeyringRecord) -> KeyringResults:
    signature = commit.signature
    if signature is None:
        transcript = ""
    else:
        transcript = verifier.verify(signature + b"\n", signable_payload(commit), keyring)
    results = parse_transcript(transcript)
    log.debug(f"[REVIEW] keyring {keyring.id}: {len(results)} signature result(s)")
    return KeyringResults(keyring=keyring, results=results)


def review_commit(ref: str,
                  store: ObjectStore,
                  verifier: Verifier,
                  keyrings: Sequence[KeyringRecord],
                  require_signature: bool = False,
                  max_workers: Optional[int] = None) -> ReviewReport:
    commit = parse_commit(store.read(ref))
    if not commit.is_signed:
        log.info(f"[REVIEW] {ref} carries no gpgsig header")

    workers = max_workers or max(len(keyrings), 1)
    with ThreadPoolExecutor(max_workers=workers) as pool:
        per_keyring = list(pool.map(lambda k: check_keyring(commit, verifier, k), keyrings))

    status = aggregate(per_keyring, require_signature=require_signature)
    log.info(f"[REVIEW] {ref} valid={status.valid} keys={len(status.keys)}")
    return ReviewReport(ref=ref, commit=commit, status=status, per_keyring=per_keyring)


def render_status(report: ReviewReport) -> str:
    lines = []
    for name, value in report.commit.headers:
        if name == b"gpgsig":
            continue
        lines.append(f"{name.decode(errors='replace')}: {value.decode(errors='replace')}")
    lines.append("")

    if not report.status.keys:
        lines.append("signatures: none")
    for key_id, s in report.status.keys.items():
        if s.is_missing_key:
            state = "UNKNOWN KEY"
        elif s.is_valid:
            state = "VALID"
        else:
            state = "INVALID"
        line = f"  {key_id}  {state}"
        if s.timestamp:
            line += f"  signed {s.timestamp.isoformat()}"
        if s.expires:
            line += f"  expires {s.expires.isoformat()}"
        if s.keyrings:
            line += "  keyrings: " + ", ".join(k.id for k in s.keyrings)
        lines.append(line)

    lines.append("")
    lines.append(f"valid: {'yes' if report.valid else 'no'}")
    return "\n".join(lines)
