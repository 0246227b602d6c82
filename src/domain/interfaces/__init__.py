# Domain Interfaces Package
"""
Abstract base classes defining contracts for infrastructure implementations.
"""

from .page_interface import RenderablePage, RenderedElement

__all__ = ["RenderablePage", "RenderedElement"]
