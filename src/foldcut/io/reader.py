"""Scene reader for loading editor documents.

This module provides the SceneReader class for loading scene JSON files
and converting them into domain models.
"""

import json
from pathlib import Path

from foldcut.domain import Scene
from foldcut.exceptions import SceneLoadError


class SceneReader:
    """Loads scene JSON documents.

    Example:
        reader = SceneReader(Path("scene.json"))
        scene = reader.load()
        for shape in scene.shapes:
            print(shape.id)
    """

    def __init__(self, scene_path: Path) -> None:
        """Initialize the scene reader.

        Args:
            scene_path: Path to the scene JSON file
        """
        self._scene_path = scene_path
        self._scene: Scene | None = None

    def load(self) -> Scene:
        """Load and parse the scene file.

        Returns:
            The loaded scene

        Raises:
            FileNotFoundError: If the scene file does not exist
            SceneLoadError: If the file is not valid scene JSON
        """
        if not self._scene_path.exists():
            raise FileNotFoundError(f"Scene file not found: {self._scene_path}")

        try:
            text = self._scene_path.read_text(encoding="utf-8")
            data = json.loads(text)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise SceneLoadError(str(self._scene_path), str(e)) from e

        self._scene = parse_scene(data, source=str(self._scene_path))
        return self._scene

    @property
    def scene(self) -> Scene:
        """Return the loaded scene.

        Raises:
            RuntimeError: If the scene has not been loaded yet
        """
        if self._scene is None:
            raise RuntimeError("Scene not loaded. Call load() first.")
        return self._scene


def parse_scene(data: object, source: str = "<memory>") -> Scene:
    """Convert decoded scene JSON into a Scene.

    Args:
        data: Decoded JSON document
        source: Name used in error messages

    Returns:
        Scene instance

    Raises:
        SceneLoadError: If the document is not an object or a point is malformed
    """
    if not isinstance(data, dict):
        raise SceneLoadError(source, "scene document must be a JSON object")
    try:
        return Scene.from_dict(data)
    except (KeyError, TypeError, ValueError) as e:
        raise SceneLoadError(source, f"malformed shape data: {e}") from e
