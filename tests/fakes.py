# Stand-in backends: no gpg binary is needed to exercise the orchestrators.
from gitcosign_core.backends.base import Signer, Verifier


class FakeSigner(Signer):
    name = "fake"

    def __init__(self, signatures):
        self.signatures = list(signatures)
        self.calls = []

    def sign(self, payload, identity):
        self.calls.append((payload, identity))
        return self.signatures.pop(0)


class FakeVerifier(Verifier):
    """Answers with canned status transcripts, one per keyring id."""
    name = "fake"

    def __init__(self, transcripts):
        self.transcripts = transcripts
        self.calls = []

    def verify(self, signature, payload, keyring):
        self.calls.append((signature, payload, keyring.id))
        return self.transcripts[keyring.id]
