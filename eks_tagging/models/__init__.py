"""Data models for the EKS tag reconciler."""

from .enums import ResourceKind, ResourceLifecycle
from .tags import TagSet, TagDiff, BuildParams
from .result import TagReconcileResult
from .scope import ClusterScope

__all__ = [
    "ResourceKind",
    "ResourceLifecycle",
    "TagSet",
    "TagDiff",
    "BuildParams",
    "TagReconcileResult",
    "ClusterScope",
]
