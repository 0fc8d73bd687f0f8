# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Tag reconciliation for EKS clusters and their dependent AWS resources."""

__version__ = "0.1.0"
