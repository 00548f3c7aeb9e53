# gitcosign_core/backends/gpg.py
from __future__ import annotations
import os, tempfile
from gitcosign_core.errors import SigningError, VerifierError
from gitcosign_core.logger import get_logger
from gitcosign_core.models import KeyringRecord
from gitcosign_core.transcript import STATUS_PREFIX
from .base import Signer, Verifier, run_command

log = get_logger("gitcosign.backends.gpg")


class GpgSigner(Signer):
    """Produces binary detached signatures with ``gpg --detach-sign``."""
    name = "gpg"

    def __init__(self, gpg_bin: str = "gpg"):
        self.gpg_bin = gpg_bin

    def sign(self, payload: bytes, identity: str) -> bytes:
        cmd = [self.gpg_bin, "--batch", "--detach-sign", "--default-key", identity, "--output", "-"]
        log.info(f"[GPG SIGN] signing {len(payload)} bytes with {identity}")
        code, out, err = run_command(cmd, stdin=payload)
        if code != 0:
            raise SigningError(
                f"signer ended with error {code}: {err.decode(errors='replace').strip()}",
                command=cmd, returncode=code, stderr=err,
            )
        if not out:
            raise SigningError("signer produced no signature", command=cmd, returncode=code, stderr=err)
        return out


class GpgvVerifier(Verifier):
    """
    Checks a detached signature against one keyring with ``gpgv`` and returns
    its ``--status-fd`` transcript.

    gpgv exits non-zero for bad or unverifiable signatures; that is a normal
    outcome and is reported through the transcript. Only a run that produced
    no status output at all is treated as a failure.
    """
    name = "gpgv"

    def __init__(self, gpgv_bin: str = "gpgv"):
        self.gpgv_bin = gpgv_bin

    def verify(self, signature: bytes, payload: bytes, keyring: KeyringRecord) -> str:
        with tempfile.TemporaryDirectory(suffix=".gitcosign") as td:
            sig_path = os.path.join(td, "commit.sig")
            data_path = os.path.join(td, "commit.data")
            with open(sig_path, "wb") as fh:
                fh.write(signature)
            with open(data_path, "wb") as fh:
                fh.write(payload)

            cmd = [self.gpgv_bin, "--keyring", keyring.filename, "--status-fd", "1", "--", sig_path, data_path]
            log.debug(f"[GPGV] checking against keyring {keyring.id}")
            code, out, err = run_command(cmd)

        status = out.decode("utf-8", errors="replace")
        if code != 0 and STATUS_PREFIX not in status:
            raise VerifierError(
                f"verifier failed for keyring {keyring.id} with code {code}: "
                f"{err.decode(errors='replace').strip()}",
                command=cmd, returncode=code, stderr=err,
            )
        return status
