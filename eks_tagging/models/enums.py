# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Enumerations for resource kinds and lifecycle markers."""

from enum import Enum


class ResourceKind(str, Enum):
    """Kinds of AWS resources whose tags are reconciled."""

    CLUSTER = "cluster"
    NODEGROUP = "nodegroup"
    FARGATE_PROFILE = "fargate_profile"
    AUTO_SCALING_GROUP = "auto_scaling_group"
    INSTANCE = "instance"
    VOLUME = "volume"


class ResourceLifecycle(str, Enum):
    """Ownership marker written into the cluster tag."""

    OWNED = "owned"
    SHARED = "shared"
