from __future__ import annotations

from enum import Enum


class ScanAction(str, Enum):
    """Action recorded in the event log."""

    SIGN_IN = "sign-in"
    SIGN_OUT = "sign-out"

    def toggled(self) -> "ScanAction":
        return ScanAction.SIGN_OUT if self is ScanAction.SIGN_IN else ScanAction.SIGN_IN


class PresenceStatus(str, Enum):
    """Row status in the "currently signed in" listing."""

    CONFIRMED = "confirmed"
    PENDING = "pending"
