"""Reporting module for rendering comparison matrices."""

from regtables.reporting.markdown import MarkdownMatrixRenderer

__all__ = ["MarkdownMatrixRenderer"]
