"""CodeLens provider and the controller that manages its registration."""

from __future__ import annotations

from .controller import AnnotationProvider, CodeLensController, ProviderFactory
from .provider import CodeLens, GitCodeLensProvider

__all__ = [
    "AnnotationProvider",
    "CodeLens",
    "CodeLensController",
    "GitCodeLensProvider",
    "ProviderFactory",
]
