import numpy as np
from PIL import Image

from stepwise_astar.grid import Location
from stepwise_astar.io_utils import load_grid_image, load_image, save_image


def test_load_grid_image(tmp_path):
    pixels = np.full((3, 4), 255, dtype=np.uint8)  # depth 3, width 4
    pixels[0, 2] = 0
    pixels[2, 1] = 40
    image_path = tmp_path / "maze.png"
    Image.fromarray(pixels).save(image_path)

    grid = load_grid_image(image_path)
    assert (grid.width, grid.depth) == (4, 3)
    assert grid.is_blocked(Location(2, 0))
    assert grid.is_blocked(Location(1, 2))
    assert not grid.is_blocked(Location(0, 0))
    assert int(grid.map.sum()) == 2


def test_save_image_creates_parents_and_scales(tmp_path):
    image = np.zeros((2, 3, 3), dtype=np.uint8)
    image[0, 0] = [255, 0, 0]
    out = tmp_path / "nested" / "snapshot.png"

    save_image(image, out, scale=4)

    assert out.exists()
    with Image.open(out) as saved:
        assert saved.size == (12, 8)
        assert saved.getpixel((3, 3)) == (255, 0, 0)
        assert saved.getpixel((4, 0)) == (0, 0, 0)


def test_save_image_converts_float(tmp_path):
    out = tmp_path / "gray.png"
    save_image(np.ones((2, 2)), out)

    assert load_image(out).tolist() == [[255, 255], [255, 255]]
