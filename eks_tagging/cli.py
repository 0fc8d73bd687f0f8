# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""
Command-line entry point for the EKS tag reconciler.

Usage:
    eks-tag-reconcile --cluster my-cluster --all-nodegroups --tag team=platform
    python -m eks_tagging --cluster my-cluster --nodegroup ng-1 --fargate-profile fp-1
"""

import argparse
import logging

from . import __version__
from .clients.aws_client import TaggingClient
from .config import settings
from .models.enums import ResourceKind
from .models.result import TagReconcileResult
from .models.scope import ClusterScope
from .services.cluster_service import ClusterTagService
from .services.errors import TagReconciliationError
from .services.fargate_service import FargateTagService
from .services.nodegroup_service import NodegroupTagService
from .services.tag_updater import reconciliation_context
from .utils.cloudwatch_logger import configure_cloudwatch_logging
from .utils.logging_config import configure_logging

logger = logging.getLogger(__name__)


def parse_tag(value: str) -> tuple[str, str]:
    """Parse a KEY=VALUE command-line tag."""
    key, sep, tag_value = value.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"expected KEY=VALUE, got {value!r}")
    return key, tag_value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="eks-tag-reconcile",
        description="Reconcile tags on an EKS cluster and its nodegroups and Fargate profiles.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--cluster", help="EKS cluster name (default: $EKS_CLUSTER_NAME)")
    parser.add_argument("--region", help="AWS region (default: $AWS_REGION)")
    parser.add_argument(
        "--nodegroup", action="append", default=[], metavar="NAME",
        help="Nodegroup to reconcile; may be repeated",
    )
    parser.add_argument(
        "--all-nodegroups", action="store_true",
        help="Reconcile every nodegroup of the cluster",
    )
    parser.add_argument(
        "--fargate-profile", action="append", default=[], metavar="NAME",
        help="Fargate profile to reconcile; may be repeated",
    )
    parser.add_argument(
        "--all-fargate-profiles", action="store_true",
        help="Reconcile every Fargate profile of the cluster",
    )
    parser.add_argument(
        "--tag", action="append", default=[], type=parse_tag, metavar="KEY=VALUE",
        help="Additional tag applied to every resource; overrides $EKS_ADDITIONAL_TAGS",
    )
    parser.add_argument("--log-level", help="Logging level (default: $LOG_LEVEL)")
    return parser


def run_reconciliation(
    client: TaggingClient,
    scope: ClusterScope,
    nodegroups: list[str] | None = None,
    fargate_profiles: list[str] | None = None,
    all_nodegroups: bool = False,
    all_fargate_profiles: bool = False,
) -> list[TagReconcileResult]:
    """
    Reconcile the cluster, then the selected nodegroups, then Fargate profiles.

    Args:
        client: Tagging client
        scope: Cluster scope
        nodegroups: Nodegroup names to reconcile
        fargate_profiles: Fargate profile names to reconcile
        all_nodegroups: Reconcile every nodegroup of the cluster
        all_fargate_profiles: Reconcile every Fargate profile of the cluster

    Returns:
        Results for every resource processed, in processing order

    Raises:
        TagReconciliationError: On the first failing resource
    """
    cluster_name = scope.cluster_name
    results = ClusterTagService(client, scope).reconcile_tags()

    nodegroup_names = list(nodegroups or [])
    if all_nodegroups:
        with reconciliation_context(ResourceKind.NODEGROUP, cluster_name, "fetch"):
            nodegroup_names = client.list_nodegroups(cluster_name)

    nodegroup_service = NodegroupTagService(client, scope)
    for name in nodegroup_names:
        with reconciliation_context(ResourceKind.NODEGROUP, name, "fetch"):
            nodegroup = client.describe_nodegroup(cluster_name, name)
        results.extend(nodegroup_service.reconcile_tags(nodegroup))

    profile_names = list(fargate_profiles or [])
    if all_fargate_profiles:
        with reconciliation_context(ResourceKind.FARGATE_PROFILE, cluster_name, "fetch"):
            profile_names = client.list_fargate_profiles(cluster_name)

    fargate_service = FargateTagService(client, scope)
    for name in profile_names:
        with reconciliation_context(ResourceKind.FARGATE_PROFILE, name, "fetch"):
            profile = client.describe_fargate_profile(cluster_name, name)
        results.extend(fargate_service.reconcile_tags(profile))

    return results


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the command-line tool."""
    parser = build_parser()
    args = parser.parse_args(argv)
    config = settings()

    configure_logging(args.log_level or config.log_level)

    cluster_name = args.cluster or config.cluster_name
    if not cluster_name:
        parser.error("--cluster is required when EKS_CLUSTER_NAME is not set")
    region = args.region or config.aws_region

    cloudwatch = configure_cloudwatch_logging(
        log_group=config.cloudwatch_log_group,
        log_stream=config.cloudwatch_log_stream or cluster_name,
        cluster_name=cluster_name,
        region=region,
        enable=config.cloudwatch_enabled,
    )

    additional_tags = {**config.additional_tags, **dict(args.tag)}
    scope = ClusterScope(cluster_name, additional_tags, logger=logger)
    client = TaggingClient(region=region)

    try:
        results = run_reconciliation(
            client,
            scope,
            nodegroups=args.nodegroup,
            fargate_profiles=args.fargate_profile,
            all_nodegroups=args.all_nodegroups,
            all_fargate_profiles=args.all_fargate_profiles,
        )
    except TagReconciliationError as e:
        logger.error(f"Tag reconciliation failed: {e}")
        return 1
    else:
        for result in results:
            print(result.summary())
        changed = sum(1 for result in results if result.changed)
        logger.info(f"Reconciled {len(results)} resources, {changed} changed")
        return 0
    finally:
        if cloudwatch is not None:
            cloudwatch.flush()
