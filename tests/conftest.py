import pytest
from gitcosign_core.backends.memory_store import InMemoryObjectStore
from gitcosign_core.models import KeyringRecord

from tests.samples import SIGNED_COMMIT, UNSIGNED_COMMIT


@pytest.fixture
def unsigned_commit():
    return UNSIGNED_COMMIT


@pytest.fixture
def signed_commit():
    return SIGNED_COMMIT


@pytest.fixture
def store():
    return InMemoryObjectStore()


@pytest.fixture
def keyrings():
    return [
        KeyringRecord(id="release", filename="/keys/release.kbx", meta={"owner": "release-eng"}),
        KeyringRecord(id="security", filename="/keys/security.kbx"),
    ]
