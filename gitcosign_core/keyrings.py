"""
gitcosign_core.keyrings
-----------------------
Loads the keyring configuration: a JSON object mapping keyring id to its
settings. ``filename`` is required and is handed to the verifier as-is;
every other field is kept as opaque metadata.

    {
        "release": {"filename": "/etc/gitcosign/release.kbx", "owner": "release-eng"},
        "security": {"filename": "/etc/gitcosign/security.kbx"}
    }
"""

from __future__ import annotations
import json, os
from typing import List, Optional
from .errors import ConfigError
from .logger import get_logger
from .models import KeyringRecord

DEFAULT_KEYRINGS_FILE = "keyrings.json"

log = get_logger("gitcosign.keyrings")


def keyrings_from_dict(config: dict) -> List[KeyringRecord]:
    if not isinstance(config, dict):
        raise ConfigError("keyring configuration must be a JSON object")
    if not config:
        raise ConfigError("keyring configuration lists no keyrings")

    records = []
    for keyring_id, entry in config.items():
        if not isinstance(entry, dict):
            raise ConfigError(f"keyring {keyring_id!r}: entry must be an object")
        filename = entry.get("filename")
        if not isinstance(filename, str) or not filename:
            raise ConfigError(f"keyring {keyring_id!r}: missing 'filename'")
        meta = {k: v for k, v in entry.items() if k not in ("id", "filename")}
        records.append(KeyringRecord(id=keyring_id, filename=filename, meta=meta))
    return records


def load_keyring_config(path: Optional[str] = None) -> List[KeyringRecord]:
    path = path or os.getenv("GITCOSIGN_KEYRINGS", DEFAULT_KEYRINGS_FILE)
    try:
        with open(path, encoding="utf-8") as fh:
            config = json.load(fh)
    except OSError as e:
        raise ConfigError(f"cannot read keyring configuration {path}: {e}")
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid JSON in keyring configuration {path}: {e}")

    records = keyrings_from_dict(config)
    log.debug(f"[KEYRINGS] loaded {len(records)} keyring(s) from {path}")
    return records
