"""Tag reconciliation services."""

from .errors import TagReconciliationError
from .tag_diff import get_tag_updates, get_tag_updates_with_exemption, protected_keys_for
from .tag_builder import build_tags, cluster_tag_params, nodegroup_tags
from .cluster_service import ClusterTagService
from .nodegroup_service import NodegroupTagService
from .fargate_service import FargateTagService

__all__ = [
    "TagReconciliationError",
    "get_tag_updates",
    "get_tag_updates_with_exemption",
    "protected_keys_for",
    "build_tags",
    "cluster_tag_params",
    "nodegroup_tags",
    "ClusterTagService",
    "NodegroupTagService",
    "FargateTagService",
]
