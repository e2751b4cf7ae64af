"""Map persistence: save and load generated tile matrices."""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path

import numpy as np
from numpy.typing import NDArray

from .matrix import TILE_FIELDS, TileMatrix
from .settings import Settings

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1


def save_map(
    path: Path,
    matrix: TileMatrix,
    indices: NDArray[np.uint32],
    settings: Settings,
) -> None:
    """Save a generated map to disk.

    Uses numpy's compressed .npz format. Field arrays are stored under their
    Tile field names alongside the tile indices and JSON metadata.

    Args:
        path: Output path (should end with .npz).
        matrix: Generated tile matrix.
        indices: Tile indices, shape (height, width).
        settings: Settings used for generation.
    """
    if indices.shape != matrix.shape:
        raise ValueError(
            f"Index shape {indices.shape} doesn't match matrix shape {matrix.shape}"
        )

    metadata = {
        "version": FORMAT_VERSION,
        "width": matrix.width,
        "height": matrix.height,
        "settings": settings.model_dump(mode="json"),
        "generated_at": datetime.now(timezone.utc).isoformat(),
    }

    arrays = {name: matrix.field(name) for name in TILE_FIELDS}
    np.savez_compressed(
        path,
        indices=indices,
        metadata=np.frombuffer(json.dumps(metadata).encode("utf-8"), dtype=np.uint8),
        **arrays,
    )

    file_size = path.stat().st_size / 1024
    logger.info(f"Saved map to {path} ({file_size:.1f} KB)")


def load_map(path: Path) -> tuple[TileMatrix, NDArray[np.uint32], dict]:
    """Load a map from disk.

    Args:
        path: Path to .npz file.

    Returns:
        Tuple of (tile matrix, tile indices, metadata dict).

    Raises:
        FileNotFoundError: If file doesn't exist.
        ValueError: If file format is invalid.
    """
    if not path.exists():
        raise FileNotFoundError(f"Map file not found: {path}")

    with np.load(path) as data:
        if "indices" not in data:
            raise ValueError("Invalid map file: missing 'indices' array")
        indices = data["indices"]
        height, width = indices.shape

        matrix = TileMatrix(width, height)
        for name in TILE_FIELDS:
            if name not in data:
                raise ValueError(f"Invalid map file: missing '{name}' array")
            matrix.set_field(name, data[name])

        metadata = {}
        if "metadata" in data:
            metadata = json.loads(data["metadata"].tobytes().decode("utf-8"))

    logger.info(f"Loaded map from {path}: {width}x{height}")
    return matrix, indices, metadata


def settings_from_metadata(metadata: dict) -> Settings:
    """Rebuild the Settings stored in a map's metadata."""
    return Settings.model_validate(metadata["settings"])
