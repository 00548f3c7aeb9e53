"""
gitcosign_core.signing
----------------------
Adds a signature to a commit without discarding the ones already on it.

OpenPGP allows several detached signature packets to be concatenated in one
blob, so co-signing is: dearmor the existing ``gpgsig`` value, append the new
packet, re-armor, and splice the result back into the commit.
"""

from __future__ import annotations
from .armor import dearmor, enarmor
from .backends.base import ObjectStore, Signer
from .commit import CommitObject, parse_commit, signable_payload, splice_signature
from .logger import get_logger

log = get_logger("gitcosign.signing")


def merge_signature(commit: CommitObject, signature: bytes) -> str:
    existing = commit.signature
    if existing is None:
        return enarmor(signature)
    return enarmor(dearmor(existing) + signature)


def sign_commit(ref: str, key_id: str, store: ObjectStore, signer: Signer) -> str:
    """Co-sign ``ref`` with ``key_id``; returns the id of the new commit object."""
    commit = parse_commit(store.read(ref))
    signature = signer.sign(signable_payload(commit), key_id)
    # enarmor ends with a newline; the gpgsig header line supplies its own
    armored = merge_signature(commit, signature).rstrip("\n")
    object_id = store.write(splice_signature(commit, armored))
    log.info(f"[SIGN] {ref} signed by {key_id} -> {object_id}")
    return object_id
