from .layout import DocumentLayout, LayoutContext, LayoutCursor, layout_document
from .pdf_renderer import RenderedDocument, render

__all__ = [
    "render",
    "RenderedDocument",
    "layout_document",
    "DocumentLayout",
    "LayoutContext",
    "LayoutCursor",
]
