"""
Unit tests for ImageAsset.
"""

from pathlib import Path

import pytest

from image_pdf_toolkit.core.models import ImageAsset, new_image_id


class TestImageAsset:
    """Tests for ImageAsset dataclass."""

    def test_from_path_when_file_exists_then_size_read(self, sample_image):
        """from_path records name and byte size, not dimensions."""
        asset = ImageAsset.from_path(sample_image, image_id="abc")

        assert asset.id == "abc"
        assert asset.name == "sample.png"
        assert asset.byte_size == sample_image.stat().st_size
        assert not asset.has_dimensions

    def test_from_bytes_when_data_then_length_is_size(self):
        """In-memory sources use their length as byte size."""
        asset = ImageAsset.from_bytes("x.png", b"12345")
        assert asset.byte_size == 5
        assert len(asset.id) == 9

    def test_with_dimensions_when_decoded_then_new_instance(self):
        """Dimensions are attached by copy; the original is unchanged."""
        asset = ImageAsset("a", "a.png", Path("a.png"))

        sized = asset.with_dimensions(1600, 1200)

        assert sized.aspect_ratio == pytest.approx(4 / 3)
        assert sized.id == asset.id
        assert asset.width is None

    def test_aspect_ratio_when_no_dimensions_then_raises(self):
        """Ratio is undefined before decoding."""
        with pytest.raises(ValueError, match="no dimensions"):
            ImageAsset("a", "a.png", b"").aspect_ratio

    @pytest.mark.parametrize("kwargs", [
        {"byte_size": -1},
        {"width": 10},
        {"width": 0, "height": 10},
    ])
    def test_init_when_invalid_then_raises(self, kwargs):
        """Negative sizes and half-set dimensions are rejected."""
        with pytest.raises(ValueError):
            ImageAsset("a", "a.png", b"", **kwargs)


def test_new_image_id_when_called_then_base36_of_length_9():
    """Ids are nine lowercase base-36 characters."""
    image_id = new_image_id()
    assert len(image_id) == 9
    assert all(c.isdigit() or c.islower() for c in image_id)
