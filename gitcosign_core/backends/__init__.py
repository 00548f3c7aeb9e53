# gitcosign_core/backends/__init__.py
import os
from gitcosign_core.errors import ConfigError
from gitcosign_core.backends.base import ObjectStore, Signer, Verifier
from gitcosign_core.backends.git_store import GitObjectStore
from gitcosign_core.backends.memory_store import InMemoryObjectStore
from gitcosign_core.backends.gpg import GpgSigner, GpgvVerifier


def object_store_factory(mode: str = None) -> ObjectStore:
    """
    mode:
      - "git"    → repository object database via git plumbing (default)
      - "memory" → in-process store, git-compatible object ids. It starts
                   empty, so it can only be requested by argument, never
                   through GITCOSIGN_OBJECT_STORE.
    """
    from_env = mode is None
    mode = (mode or os.getenv("GITCOSIGN_OBJECT_STORE", "git")).lower()

    if mode == "memory":
        if from_env:
            raise ConfigError("GITCOSIGN_OBJECT_STORE=memory is not supported: the memory store is in-process only")
        object_format = os.getenv("GITCOSIGN_OBJECT_FORMAT", "sha1").lower()
        if object_format not in ("sha1", "sha256"):
            raise ConfigError(f"Unknown object format: {object_format}")
        return InMemoryObjectStore(object_format)

    if mode == "git":
        return GitObjectStore(git_dir=os.getenv("GITCOSIGN_GIT_DIR") or None)

    raise ConfigError(f"Unknown object store: {mode}")


def signer_factory() -> Signer:
    return GpgSigner(os.getenv("GITCOSIGN_GPG", "gpg"))


def verifier_factory() -> Verifier:
    return GpgvVerifier(os.getenv("GITCOSIGN_GPGV", "gpgv"))


__all__ = [
    "ObjectStore",
    "Signer",
    "Verifier",
    "GitObjectStore",
    "InMemoryObjectStore",
    "GpgSigner",
    "GpgvVerifier",
    "object_store_factory",
    "signer_factory",
    "verifier_factory",
]
