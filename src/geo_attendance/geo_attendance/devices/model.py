from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DeviceDecision:
    """Outcome of a successful device authorization."""

    allowed: bool = True
    newly_bound: bool = False
    skipped: bool = False
