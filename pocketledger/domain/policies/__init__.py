"""Domain policies package."""

from .ownership import require_found, require_owned

__all__ = ["require_found", "require_owned"]
