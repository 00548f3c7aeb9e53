# gitcosign_core/models.py
from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


@dataclass
class KeyringRecord:
    """
    One configured trust store.

    Only ``filename`` matters to the verifier; everything else from the
    keyring configuration rides along in ``meta`` untouched.
    """
    id: str
    filename: str
    meta: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "filename": self.filename, **self.meta}


@dataclass(frozen=True)
class SignatureVerificationResult:
    is_valid: bool
    is_missing_key: bool
    key_id: str
    timestamp: Optional[datetime] = None
    expires: Optional[datetime] = None


@dataclass
class KeyringResults:
    keyring: KeyringRecord
    results: List[SignatureVerificationResult] = field(default_factory=list)


@dataclass
class KeyStatus:
    key_id: str
    is_valid: bool
    is_missing_key: bool
    timestamp: Optional[datetime] = None
    expires: Optional[datetime] = None
    keyrings: List[KeyringRecord] = field(default_factory=list)

    def credit(self, keyring: KeyringRecord) -> None:
        if all(k.id != keyring.id for k in self.keyrings):
            self.keyrings.append(keyring)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key_id": self.key_id,
            "is_valid": self.is_valid,
            "is_missing_key": self.is_missing_key,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
            "expires": self.expires.isoformat() if self.expires else None,
            "keyrings": [k.id for k in self.keyrings],
        }


@dataclass
class AggregatedSignatureStatus:
    keys: Dict[str, KeyStatus] = field(default_factory=dict)
    valid: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "valid": self.valid,
            "keys": {key_id: status.to_dict() for key_id, status in self.keys.items()},
        }
