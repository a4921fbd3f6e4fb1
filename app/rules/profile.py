# app/rules/profile.py
from __future__ import annotations
import math
import numbers
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional

_FIELDS = ("sector", "size", "state", "udyam")


@dataclass
class CompanyProfile:
    sector: Any = None
    size: Any = None
    state: Any = None
    udyam: Any = None
    turnover_cr: Optional[float] = None
    compliance: List[str] = field(default_factory=list)


def _get(payload: Any, key: str) -> Any:
    if payload is None:
        return None
    if isinstance(payload, Mapping):
        return payload.get(key)
    try:
        return getattr(payload, key, None)
    except Exception:
        return None


def parse_turnover(value: Any) -> Optional[float]:
    """Best-effort turnover (in crores). Anything unusable is treated as missing."""
    if value is None or isinstance(value, bool):
        return None
    if not isinstance(value, (numbers.Real, str)):
        return None
    try:
        out = float(value.strip() if isinstance(value, str) else value)
    except (ValueError, OverflowError, TypeError):
        return None
    return out if math.isfinite(out) else None


def parse_compliance(value: Any) -> List[str]:
    if isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value):
        return list(value)
    return []


def normalize_profile(payload: Any) -> CompanyProfile:
    """
    Coerce an untrusted payload (dict, object or None) into a CompanyProfile.
    Never raises: the caller is a network boundary.
    """
    turnover = _get(payload, "turnoverCr")
    if turnover is None:
        turnover = _get(payload, "turnover_cr")

    return CompanyProfile(
        **{k: _get(payload, k) for k in _FIELDS},
        turnover_cr=parse_turnover(turnover),
        compliance=parse_compliance(_get(payload, "compliance")),
    )
