from __future__ import annotations

import logging
from pathlib import Path

import cv2
import numpy as np

from roadraster.core.encode import encode_image
from roadraster.core.road_map import RoadMap

__all__ = [
    "rgba_to_bgra",
    "save_as_png",
]

logger = logging.getLogger(__name__)


def rgba_to_bgra(image_rgba: np.ndarray) -> np.ndarray:
    # OpenCV expects BGR(A) channel order
    return cv2.cvtColor(np.ascontiguousarray(image_rgba, dtype=np.uint8), cv2.COLOR_RGBA2BGRA)


def save_as_png(road_map: RoadMap, path: str | Path) -> str:
    """
    Сохраняет закодированную карту (encode_image) в PNG.

    Суффикс пути всегда заменяется на .png (map.bmp -> map.png); возвращается путь
    фактически записанного файла. Непостроенная карта -> RoadMapNotBuiltError.
    """
    image = encode_image(road_map)
    out = Path(path)
    if out.suffix.lower() != ".png":
        out = out.with_suffix(".png")
    out.parent.mkdir(parents=True, exist_ok=True)
    if not cv2.imwrite(str(out), rgba_to_bgra(image)):
        raise RuntimeError(f"Не удалось записать изображение карты: {out}")
    logger.info("Saved road map (%dx%d) to \"%s\"", road_map.width, road_map.height, out)
    return str(out)
