# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Cluster scope handed to the tag reconcilers."""

import logging
from typing import Any


class ClusterScope:
    """
    Cluster-level context shared by the reconcilers.

    Exposes the cluster name, the user's additional tags and a logging
    sink that renders structured key/value pairs.
    """

    def __init__(
        self,
        cluster_name: str,
        additional_tags: dict[str, str] | None = None,
        logger: logging.Logger | None = None,
    ):
        """
        Args:
            cluster_name: Name of the EKS cluster
            additional_tags: User tags applied to every reconciled resource
            logger: Logger receiving messages (defaults to this module's logger)
        """
        if not cluster_name:
            raise ValueError("cluster_name must not be empty")
        self._cluster_name = cluster_name
        self._additional_tags = dict(additional_tags or {})
        self._logger = logger or logging.getLogger(__name__)

    @property
    def cluster_name(self) -> str:
        return self._cluster_name

    @property
    def additional_tags(self) -> dict[str, str]:
        """A copy of the additional tags, safe for callers to mutate."""
        return dict(self._additional_tags)

    def info(self, message: str, **fields: Any) -> None:
        self._logger.info(_format(message, fields))

    def debug(self, message: str, **fields: Any) -> None:
        if self._logger.isEnabledFor(logging.DEBUG):
            self._logger.debug(_format(message, fields))


def _format(message: str, fields: dict[str, Any]) -> str:
    if not fields:
        return message
    pairs = ", ".join(f"{key}={value}" for key, value in fields.items())
    return f"{message}: {pairs}"
