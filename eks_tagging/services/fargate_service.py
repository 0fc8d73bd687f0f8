# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Tag reconciliation for EKS Fargate profiles."""

from typing import Any

from ..clients.aws_client import TaggingClient
from ..models.enums import ResourceKind
from ..models.result import TagReconcileResult
from ..models.scope import ClusterScope
from .tag_builder import nodegroup_tags
from .tag_updater import update_eks_tags


class FargateTagService:
    """Keeps a Fargate profile's tags in line with the cluster metadata."""

    def __init__(self, client: TaggingClient, scope: ClusterScope):
        self.client = client
        self.scope = scope

    def reconcile_tags(self, profile: dict[str, Any]) -> list[TagReconcileResult]:
        """
        Reconcile a Fargate profile's tags.

        Args:
            profile: Profile description as returned by DescribeFargateProfile

        Returns:
            Single-element list with the profile's result
        """
        desired = nodegroup_tags(self.scope.cluster_name, self.scope.additional_tags)
        self.scope.info(
            "Reconciling fargate profile tags",
            cluster_name=self.scope.cluster_name,
            fargate_profile=profile.get("fargateProfileName"),
        )
        result = update_eks_tags(
            self.client,
            ResourceKind.FARGATE_PROFILE,
            profile["fargateProfileArn"],
            dict(profile.get("tags") or {}),
            desired,
        )
        return [result]
