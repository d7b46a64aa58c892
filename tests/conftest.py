import pytest
import sys
from pathlib import Path
from PIL import Image

# Add src to sys.path so we can import image_pdf_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from image_pdf_toolkit.core.models import ImageAsset


# Common test fixtures
@pytest.fixture
def make_asset():
    """Factory for sized assets that never touch the filesystem."""
    def _create(width: int, height: int, image_id: str = "img", byte_size: int = 1024):
        return ImageAsset(
            id=image_id,
            name=f"{image_id}.png",
            source=b"",
            byte_size=byte_size,
            width=width,
            height=height,
        )
    return _create


@pytest.fixture
def image_files(tmp_path: Path):
    """Factory writing real image files to tmp_path."""
    def _create(sizes, fmt: str = "PNG", mode: str = "RGB"):
        paths = []
        suffix = ".jpg" if fmt == "JPEG" else f".{fmt.lower()}"
        for i, (w, h) in enumerate(sizes):
            img = Image.new(mode, (w, h), color="red" if mode == "RGB" else 0)
            path = tmp_path / f"img_{i:02d}{suffix}"
            img.save(path, format=fmt)
            paths.append(path)
        return paths
    return _create


@pytest.fixture
def rotated_jpeg(tmp_path: Path):
    """
    Camera-style JPEG stored 400x300 with EXIF Orientation=6.

    Displayed upright it is 300 wide and 400 tall.
    """
    img = Image.new("RGB", (400, 300), color="blue")
    exif = Image.Exif()
    exif[0x0112] = 6
    img_path = tmp_path / "phone.jpg"
    img.save(img_path, format="JPEG", exif=exif)
    return img_path


@pytest.fixture
def sample_image(tmp_path: Path):
    """Create a simple test image."""
    img = Image.new("RGB", (200, 100), color="white")
    img_path = tmp_path / "sample.png"
    img.save(img_path)
    return img_path
