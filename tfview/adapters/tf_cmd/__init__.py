"""tf command-line adapter."""

from tfview.adapters.tf_cmd.tf_adapter import TfAdapter, resolve_tf_path

__all__ = ["TfAdapter", "resolve_tf_path"]
