# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Errors raised by the tag reconcilers."""

from ..models.enums import ResourceKind


class TagReconciliationError(Exception):
    """Raised when fetching, adding or removing tags on a resource fails."""

    def __init__(self, message: str, kind: ResourceKind, resource_id: str, operation: str):
        super().__init__(message)
        self.kind = kind
        self.resource_id = resource_id
        self.operation = operation

    def __str__(self) -> str:
        cause = self.__cause__
        base = super().__str__()
        return f"{base}: {cause}" if cause is not None else base
