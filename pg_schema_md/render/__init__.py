"""Document renderers."""

from .markdown import MarkdownRenderer, RenderError, render, render_to_string

__all__ = ["MarkdownRenderer", "RenderError", "render", "render_to_string"]
