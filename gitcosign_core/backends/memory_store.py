from typing import Dict, Optional
from gitcosign_core.errors import ObjectNotFound
from gitcosign_core.utils import git_object_id
from .base import ObjectStore


class InMemoryObjectStore(ObjectStore):
    """
    Content-addressed commit store held in a dict.

    Object ids are computed exactly as git computes them, so a commit written
    here gets the same id ``git hash-object -t commit`` would give it.
    """
    name = "memory"

    def __init__(self, object_format: str = "sha1"):
        self.object_format = object_format
        self.objects: Dict[str, bytes] = {}
        self.refs: Dict[str, str] = {}

    def write(self, raw: bytes) -> str:
        object_id = git_object_id(raw, "commit", self.object_format)
        self.objects[object_id] = raw
        return object_id

    def set_ref(self, ref: str, object_id: str) -> None:
        if object_id not in self.objects:
            raise ObjectNotFound(f"no commit object for {object_id!r}")
        self.refs[ref] = object_id

    def resolve(self, identifier: str) -> Optional[str]:
        if identifier in self.objects:
            return identifier
        return self.refs.get(identifier)

    def read(self, identifier: str) -> bytes:
        object_id = self.resolve(identifier)
        if object_id is None:
            raise ObjectNotFound(f"no commit object for {identifier!r}")
        return self.objects[object_id]
