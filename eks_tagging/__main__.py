"""
Allow running the tag reconciler as a Python module.

Usage:
    python -m eks_tagging --cluster my-cluster
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
