import hashlib


def sha256(value: str) -> str:
    """Compute the lowercase SHA-256 hex digest of a UTF-8 string."""
    return hashlib.sha256(value.encode("utf-8")).hexdigest()


def verify_server_seed_hash(server_seed: str, server_seed_hash: str) -> bool:
    """
    Check a revealed server seed against the hash committed before play.

    The comparison ignores case so that operators publishing uppercase hex
    still verify.
    """
    return sha256(server_seed).lower() == server_seed_hash.lower()


def create_audit_digest(server_seed: str) -> str:
    """
    Short fingerprint of a server seed for logs.

    Returns the first 12 hex characters of its SHA-256, so log lines can be
    correlated with a round without ever containing the plaintext seed.
    """
    return sha256(server_seed)[:12]
