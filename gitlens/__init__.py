"""Keep CodeLens registrations in step with settings and link git resources to hosting services."""

from __future__ import annotations

__version__ = "0.4.0"

__all__ = ["__version__"]
