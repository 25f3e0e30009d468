"""Content-addressed fingerprints for normalized entities.

The fingerprint is the SHA-256 hex digest of a canonical JSON rendering:
keys sorted at every nesting level, no insignificant whitespace, and
integral floats written as integers (the API does not distinguish ``16`` from
``16.0``). Two structurally equal forms hash identically however their dicts
were built.
"""

import hashlib
import json
from typing import Any

FINGERPRINT_LENGTH = 64


def _fold_numbers(value: Any) -> Any:
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, dict):
        return {k: _fold_numbers(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_fold_numbers(v) for v in value]
    return value


def canonical_json(form: Any) -> str:
    """Serialize a normalized form deterministically."""
    return json.dumps(
        _fold_numbers(form), sort_keys=True, separators=(",", ":"), ensure_ascii=False
    )


def fingerprint(form: Any) -> str:
    """Return the 64-character hex fingerprint of a normalized form."""
    return hashlib.sha256(canonical_json(form).encode("utf-8")).hexdigest()
