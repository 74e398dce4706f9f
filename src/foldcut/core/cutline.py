"""Cut-line estimation.

The cut line is a visual aid: one horizontal line through the vertical
middle of the skeleton's bounding box, spanning the viewport width.
"""

from foldcut.domain import CutLine, Point, Skeleton, Viewport


def estimate_cut_line(skeleton: Skeleton, viewport: Viewport) -> CutLine:
    """Horizontal line at the vertical midpoint of the skeleton.

    Args:
        skeleton: Skeleton whose vertices are bounded
        viewport: Drawing area; the line runs from x=0 to x=width

    Returns:
        CutLine from (0, y) to (width, y). An empty skeleton gives y = 0.
    """
    _, min_y, _, max_y = skeleton.bounding_box()
    y = (min_y + max_y) / 2.0
    return CutLine(a=Point(0.0, y), b=Point(float(viewport.width), y))
