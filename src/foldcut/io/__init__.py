"""Scene and result I/O for foldcut.

This module handles reading editor scenes and writing crease pattern
results as JSON. It provides a thin layer between files and the domain
models.

Key responsibilities:
- Load scene JSON with tolerant shape parsing
- Export results with rounded coordinates
- Default output naming

Key classes:
- SceneReader: Load scenes
- ResultWriter: Save results
"""

from foldcut.io.reader import SceneReader, parse_scene
from foldcut.io.writer import ResultWriter, result_to_dict

__all__ = [
    "ResultWriter",
    "SceneReader",
    "parse_scene",
    "result_to_dict",
]
