"""
Input/Output utilities for grid images.
"""

import logging
from pathlib import Path

import numpy as np
from PIL import Image

from .grid import FREE, WALL, FOUR_CONNECTED, OccupancyGrid

logger = logging.getLogger(__name__)


def load_image(image_path: Path) -> np.ndarray:
    """
    Load image file as a grayscale numpy array.

    Args:
        image_path: Path to image file

    Returns:
        Numpy array of image (H, W)
    """
    with Image.open(image_path) as img:
        return np.array(img.convert("L"))


def load_grid_image(image_path: Path, threshold: int = 128, directions=FOUR_CONNECTED) -> OccupancyGrid:
    """
    Build an occupancy grid from an image, one pixel per cell.

    Pixels darker than threshold are walls. Image rows are z, columns x.

    Args:
        image_path: Path to image file
        threshold: Gray level below which a pixel is a wall
        directions: Neighbour step set of the returned grid

    Returns:
        OccupancyGrid
    """
    pixels = load_image(image_path)
    occupancy = np.where(pixels < threshold, WALL, FREE).astype(np.int8)
    logger.debug("Loaded %s: %dx%d, %d walls", image_path, pixels.shape[1], pixels.shape[0],
                 int(occupancy.sum()))
    return OccupancyGrid(occupancy.T, directions)


def save_image(image: np.ndarray, image_path: Path, scale: int = 1):
    """
    Save numpy array as image.

    Args:
        image: Numpy array of image (H, W) or (H, W, 3)
        image_path: Path to save image
        scale: Integer upscaling factor, each cell becomes scale x scale pixels
    """
    image_path = Path(image_path)
    image_path.parent.mkdir(parents=True, exist_ok=True)
    if image.dtype != np.uint8:
        if image.max() <= 1.0:
            image = (image * 255).astype(np.uint8)
        else:
            image = image.astype(np.uint8)
    if scale > 1:
        image = np.repeat(np.repeat(image, scale, axis=0), scale, axis=1)

    Image.fromarray(image).save(image_path)
