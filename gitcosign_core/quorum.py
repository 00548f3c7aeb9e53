"""
gitcosign_core.quorum
---------------------
Combines per-keyring verification results into one verdict.

Results are aligned by position: index i in every keyring's list refers to
the same signature packet. A key id's state is accumulated across keyrings:

- a missing-key result carries no signal and is skipped
- an invalid result makes the key invalid for good
- a valid result credits the keyring that produced it

The overall verdict is False as soon as one known key is invalid. Whether a
commit with no (or only unknown) signatures passes is a policy decision made
by the caller through ``require_signature``.
"""

from __future__ import annotations
from typing import Dict, Sequence
from .errors import ConsistencyError
from .logger import get_logger
from .models import AggregatedSignatureStatus, KeyringResults, KeyStatus

log = get_logger("gitcosign.quorum")


def aggregate(per_keyring: Sequence[KeyringResults], require_signature: bool = False) -> AggregatedSignatureStatus:
    counts = {len(entry.results) for entry in per_keyring}
    if len(counts) > 1:
        detail = ", ".join(f"{e.keyring.id}={len(e.results)}" for e in per_keyring)
        raise ConsistencyError(f"keyrings disagree on signature count ({detail})")

    keys: Dict[str, KeyStatus] = {}
    for entry in per_keyring:
        keyring = entry.keyring
        for sig in entry.results:
            acc = keys.get(sig.key_id)
            if acc is None:
                acc = KeyStatus(
                    key_id=sig.key_id,
                    is_valid=sig.is_valid,
                    is_missing_key=sig.is_missing_key,
                    timestamp=sig.timestamp,
                    expires=sig.expires,
                )
                keys[sig.key_id] = acc

            if sig.is_missing_key:
                continue

            if not sig.is_valid:
                acc.is_valid = False
            if acc.is_missing_key:
                acc.is_missing_key = False
                acc.is_valid = sig.is_valid
                acc.timestamp = sig.timestamp
                acc.expires = sig.expires
            if sig.is_valid:
                acc.credit(keyring)

    valid = True
    known = 0
    for key_id, status in keys.items():
        if status.is_missing_key:
            log.debug(f"[QUORUM] {key_id} unknown to every keyring")
            continue
        known += 1
        if not status.is_valid:
            log.info(f"[QUORUM] {key_id} failed verification")
            valid = False

    if require_signature and known == 0:
        log.info("[QUORUM] no verifiable signature and one is required")
        valid = False

    return AggregatedSignatureStatus(keys=keys, valid=valid)

