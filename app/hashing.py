import hashlib
import re

UDYAM_RE = re.compile(r"^UDYAM-[A-Z]{2}-\d{2}-\d{7}$")

def normalize_udyam(value: str | None) -> str:
    """
    Normalize a Udyam registration number prior to hashing.
    - trim + uppercase
    """
    if value is None:
        return ""
    return str(value).strip().upper()

def is_valid_udyam(value: str | None) -> bool:
    return bool(UDYAM_RE.match(normalize_udyam(value)))

def hash_udyam(value: str | None, pepper: str) -> str | None:
    """
    Returns a hex SHA-256 over pepper || normalized_value, or None for empty input.
    Deterministic so the same registration maps to the same log key.
    """
    norm = normalize_udyam(value)
    if not norm:
        return None
    h = hashlib.sha256()
    h.update(pepper.encode("utf-8"))
    h.update(norm.encode("utf-8"))
    return h.hexdigest()
