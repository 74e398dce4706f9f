"""Result writer for exporting crease patterns.

This module provides the ResultWriter class for writing an engine result
as program-friendly JSON.
"""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from foldcut.config import ExportConfig
from foldcut.domain import ResultBundle
from foldcut.exceptions import ResultSaveError


def result_to_dict(
    result: ResultBundle | None,
    config: ExportConfig | None = None,
    created_at: datetime | None = None,
) -> dict[str, Any]:
    """Build the export document for a result.

    Coordinates are rounded to ``config.precision`` digits; the result
    itself keeps full precision. Creases keep production order.

    Args:
        result: Engine result (None exports an error document)
        config: Export settings (defaults if None)
        created_at: Timestamp for the metadata (now if None)

    Returns:
        JSON-serializable dictionary
    """
    if result is None:
        return {"error": "no result"}

    config = config or ExportConfig()
    created_at = created_at or datetime.now(timezone.utc)

    document: dict[str, Any] = {
        "meta": {
            "generator": config.generator,
            "createdAt": created_at.isoformat(),
        },
        "creases": [c.to_dict(config.precision) for c in result.creases],
        "cutLine": result.cut_line.to_dict(config.precision),
    }
    if config.include_rings:
        document["rings"] = [
            [[round(x, config.precision), round(y, config.precision)] for x, y in ring]
            for ring in result.rings.to_explicit()
        ]
    return document


class ResultWriter:
    """Writes crease pattern results as JSON.

    Example:
        writer = ResultWriter(Path("creases.json"))
        writer.save(result)
    """

    def __init__(self, output_path: Path, config: ExportConfig | None = None) -> None:
        """Initialize the result writer.

        Args:
            output_path: Path where the JSON will be saved
            config: Export settings (defaults if None)
        """
        self._output_path = output_path
        self._config = config or ExportConfig()

    def save(self, result: ResultBundle | None) -> None:
        """Save the result to the output path.

        Raises:
            ResultSaveError: If the file cannot be written
        """
        document = result_to_dict(result, self._config)
        try:
            self._output_path.write_text(json.dumps(document, indent=2), encoding="utf-8")
        except OSError as e:
            raise ResultSaveError(str(self._output_path), str(e)) from e

    @staticmethod
    def get_result_path(scene_path: Path) -> Path:
        """Generate the default output path for a scene.

        Converts: scene.json -> scene-creases.json

        Args:
            scene_path: Scene file path

        Returns:
            Path with -creases suffix, always ending in .json
        """
        return scene_path.parent / f"{scene_path.stem}-creases.json"
