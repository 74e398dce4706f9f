"""Foldcut - Straight-skeleton crease patterns for fold-and-cut shapes.

Foldcut takes the closed polygons drawn in a scene (one outer boundary plus
optional holes), computes the straight skeleton of the resulting region and
derives an illustrative crease pattern from it:

- Mountain creases: skeleton edges shared by two skeleton faces
- Valley creases: perpendiculars from skeleton nodes toward each face's
  defining edge
- Cut line: one horizontal line through the middle of the skeleton

The pattern is a heuristic approximation. It is not a complete fold-and-cut
reflection construction and is not guaranteed to fold flat.

Example:
    $ foldcut scene.json

This will create scene-creases.json with the crease list and the rings used.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
