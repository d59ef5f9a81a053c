"""Sideways renderers.

Available Renderers:
- HtmlRenderingMixin: Resolves deferred parses and writes the element tree
  as HTML using the StringBuilder pattern

Thread Safety:
Renderers keep per-document state in the ParseContext passed to them.

"""

from sideways.renderers.html import HtmlRenderingMixin

__all__ = ["HtmlRenderingMixin"]
