"""Resolution and staging of file version diffs."""

from tfview.core.diff.resolver import VersionDiffResolver
from tfview.core.diff.staging import DiffStager

__all__ = ["DiffStager", "VersionDiffResolver"]
