from .canvas import draw_hline, draw_vline, fill_rect, new_canvas
from .draw_lines import draw_polyline, draw_segment
from .draw_text import draw_text, text_size

__all__ = [
    "draw_hline",
    "draw_vline",
    "draw_polyline",
    "draw_segment",
    "draw_text",
    "fill_rect",
    "new_canvas",
    "text_size",
]
