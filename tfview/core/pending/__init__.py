"""Pending change tracking."""

from tfview.core.pending.poller import StatusPoller
from tfview.core.pending.repository import PendingChangeRepository
from tfview.core.pending.save_detector import SaveDetector

__all__ = ["PendingChangeRepository", "SaveDetector", "StatusPoller"]
