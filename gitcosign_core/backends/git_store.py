# gitcosign_core/backends/git_store.py
from __future__ import annotations
from typing import List, Optional
from gitcosign_core.errors import ExternalProcessError, ObjectNotFound
from gitcosign_core.logger import get_logger
from .base import ObjectStore, run_command

log = get_logger("gitcosign.backends.git")


class GitObjectStore(ObjectStore):
    """Reads and writes commit objects through the git plumbing commands."""
    name = "git"

    def __init__(self, git_dir: Optional[str] = None, git_bin: str = "git"):
        self.git_dir = git_dir
        self.git_bin = git_bin

    def _cmd(self, args: List[str]) -> List[str]:
        if self.git_dir:
            return [self.git_bin, "--git-dir", self.git_dir, "--no-pager"] + args
        return [self.git_bin, "--no-pager"] + args

    def read(self, identifier: str) -> bytes:
        cmd = self._cmd(["cat-file", "commit", identifier])
        log.debug(f"[GIT READ] {identifier}")
        code, out, err = run_command(cmd)
        if code != 0:
            raise ObjectNotFound(
                f"no commit object for {identifier!r}: {err.decode(errors='replace').strip()}",
                command=cmd, returncode=code, stderr=err,
            )
        return out

    def write(self, raw: bytes) -> str:
        cmd = self._cmd(["hash-object", "-t", "commit", "-w", "--stdin", "--no-filters"])
        code, out, err = run_command(cmd, stdin=raw)
        if code != 0:
            log.error(f"[GIT WRITE] git returned error code {code}")
            raise ExternalProcessError(
                f"git error on saving commit: {err.decode(errors='replace').strip()}",
                command=cmd, returncode=code, stderr=err,
            )
        object_id = out.decode("ascii").strip()
        log.info(f"[GIT WRITE] stored commit {object_id}")
        return object_id
