from __future__ import annotations
from typing import Dict, List, Optional, Tuple
import subprocess
from gitcosign_core.errors import ExternalProcessError
from gitcosign_core.logger import get_logger
from gitcosign_core.models import KeyringRecord

log = get_logger("gitcosign.exec")


class ObjectStore:
    """
    Commit storage contract.

    read() returns the raw commit bytes for an id or ref and raises
    ObjectNotFound when there is none; write() stores raw commit bytes and
    returns the content-derived object id.
    """
    name: str = "base"

    def read(self, identifier: str) -> bytes:
        raise NotImplementedError

    def write(self, raw: bytes) -> str:
        raise NotImplementedError


class Signer:
    name: str = "base"

    def sign(self, payload: bytes, identity: str) -> bytes:
        """Return a raw (binary) detached signature over payload."""
        raise NotImplementedError


class Verifier:
    name: str = "base"

    def verify(self, signature: bytes, payload: bytes, keyring: KeyringRecord) -> str:
        """Return the verifier's status transcript for one keyring."""
        raise NotImplementedError


# ---------------------------
# Subprocess helper
# ---------------------------
def run_command(cmdargs: List[str],
                stdin: Optional[bytes] = None,
                env: Optional[Dict[str, str]] = None) -> Tuple[int, bytes, bytes]:
    log.debug(f"[EXEC] {' '.join(cmdargs)}")
    try:
        cp = subprocess.run(cmdargs, input=stdin, env=env, capture_output=True)
    except OSError as e:
        raise ExternalProcessError(f"could not run {cmdargs[0]}: {e}", command=cmdargs)
    log.debug(f"[EXEC] {cmdargs[0]} exited {cp.returncode}")
    return cp.returncode, cp.stdout, cp.stderr
