# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Tag reconciliation for the EKS cluster resource."""

from typing import Any

from ..clients.aws_client import TaggingClient
from ..models.enums import ResourceKind
from ..models.result import TagReconcileResult
from ..models.scope import ClusterScope
from .tag_builder import build_tags, cluster_tag_params
from .tag_updater import reconciliation_context, update_eks_tags


class ClusterTagService:
    """Keeps the EKS cluster's tags in line with the cluster metadata."""

    def __init__(self, client: TaggingClient, scope: ClusterScope):
        self.client = client
        self.scope = scope

    def reconcile_tags(self, cluster: dict[str, Any] | None = None) -> list[TagReconcileResult]:
        """
        Reconcile the cluster's tags.

        Args:
            cluster: Cluster description as returned by DescribeCluster.
                Fetched from AWS when omitted.

        Returns:
            Single-element list with the cluster's result

        Raises:
            TagReconciliationError: If describing or tagging the cluster fails
        """
        name = self.scope.cluster_name
        if cluster is None:
            with reconciliation_context(ResourceKind.CLUSTER, name, "fetch"):
                cluster = self.client.describe_cluster(name)

        arn = cluster["arn"]
        desired = build_tags(cluster_tag_params(name, arn, self.scope.additional_tags))
        self.scope.info("Reconciling cluster tags", cluster_name=name)

        result = update_eks_tags(
            self.client, ResourceKind.CLUSTER, arn, dict(cluster.get("tags") or {}), desired
        )
        return [result]
