"""
Canonical hashing and issuer signatures for attestations.

Commitments are SHA-256 over canonical JSON (sorted keys, no whitespace) so
the same proof and public signals always commit to the same value. The
issuer signs the commitment with ed25519.
"""

import hashlib
import json
from typing import Any, Dict, List

from nacl.signing import SigningKey


def canonical_json_hash(data: Dict[str, Any]) -> str:
    """Hex SHA-256 of the canonical JSON encoding of data."""
    if not data:
        raise ValueError("Data cannot be empty")
    canonical_json = json.dumps(data, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(canonical_json.encode("utf-8")).hexdigest()


def proof_commitment(proof: str, public_signals: List[str]) -> str:
    return "0x" + canonical_json_hash({"proof": proof, "publicSignals": list(public_signals)})


def load_signing_key(seed_hex: str) -> SigningKey:
    seed = bytes.fromhex(seed_hex)
    if len(seed) != 32:
        raise ValueError("Issuer signing key seed must be 32 bytes")
    return SigningKey(seed)


def sign_commitment(signing_key: SigningKey, commitment: str) -> str:
    signed = signing_key.sign(commitment.encode("utf-8"))
    return signed.signature.hex()

