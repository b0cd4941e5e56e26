"""Tombstone audit core."""

from .audit import TombstoneAudit

__all__ = ["TombstoneAudit"]
