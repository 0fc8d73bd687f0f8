# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Reconciliation result model."""

from pydantic import BaseModel, Field

from .enums import ResourceKind
from .tags import TagDiff


class TagReconcileResult(BaseModel):
    """Outcome of reconciling tags on a single resource."""

    kind: ResourceKind = Field(..., description="Kind of resource reconciled")
    resource_id: str = Field(..., description="ARN, name or ID of the resource")
    diff: TagDiff = Field(default_factory=TagDiff, description="Diff that was computed")

    @property
    def changed(self) -> bool:
        """True when at least one tagging API call was issued."""
        return not self.diff.is_empty

    def summary(self) -> str:
        """One-line human readable summary."""
        if not self.changed:
            return f"{self.kind.value} {self.resource_id}: up to date"
        return (
            f"{self.kind.value} {self.resource_id}: "
            f"{len(self.diff.to_upsert)} upserted, {len(self.diff.to_delete)} removed"
        )
