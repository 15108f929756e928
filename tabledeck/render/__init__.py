from .pptx_renderer import PptxDeckRenderer
from .slides import CellSpec, DeckRenderer, RenderJob, SlideSpec, build_slide_specs, output_file_name

__all__ = [
    "CellSpec",
    "DeckRenderer",
    "PptxDeckRenderer",
    "RenderJob",
    "SlideSpec",
    "build_slide_specs",
    "output_file_name",
]
