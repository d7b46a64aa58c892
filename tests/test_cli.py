"""
Tests for the command-line interface.
"""

import json

import pytest

from image_pdf_toolkit.cli import build_parser, main, resolve_options
from image_pdf_toolkit.core.models import Orientation, PageFormat


class TestResolveOptions:
    """Flags override the options file."""

    def test_resolve_when_file_and_flags_then_flags_win(self, tmp_path):
        # Arrange
        options_file = tmp_path / "options.json"
        options_file.write_text(json.dumps({"page_format": "letter", "quality": 0.5, "images_per_page": 6}))
        args = build_parser().parse_args(["x.png", "--options-file", str(options_file), "--quality", "0.9"])

        # Act
        options = resolve_options(args)

        # Assert
        assert options.page_format is PageFormat.LETTER
        assert options.quality == 0.9
        assert options.images_per_page == 6
        assert options.orientation is Orientation.PORTRAIT


class TestMain:
    """End-to-end CLI runs."""

    def test_main_when_estimate_then_prints_without_writing(self, image_files, tmp_path, capsys):
        # Arrange
        paths = image_files([(10, 10)] * 5)

        # Act
        code = main([str(tmp_path), "--per-page", "4", "--estimate", "--output-dir", str(tmp_path / "out")])

        # Assert
        out = capsys.readouterr().out
        assert code == 0
        assert "Images: 5" in out
        assert "Estimated pages: 2" in out
        assert "Estimated size:" in out
        assert not (tmp_path / "out").exists()
        assert len(paths) == 5

    def test_main_when_generate_then_pdf_written(self, image_files, tmp_path, capsys):
        # Arrange
        paths = image_files([(40, 30), (30, 40), (50, 50)])
        out_dir = tmp_path / "out"

        # Act
        code = main([*map(str, paths), "-o", "trip", "--output-dir", str(out_dir), "--per-page", "2"])

        # Assert
        assert code == 0
        assert (out_dir / "trip.pdf").read_bytes().startswith(b"%PDF")
        assert "(2 pages, 3 images)" in capsys.readouterr().out

    def test_main_when_corrupt_image_then_exit_one(self, tmp_path, caplog):
        # Arrange
        bad = tmp_path / "bad.png"
        bad.write_bytes(b"not an image")

        # Act
        code = main([str(bad), "--output-dir", str(tmp_path / "out")])

        # Assert
        assert code == 1
        assert "Error generating PDF: Failed to load image: bad.png" in caplog.text
        assert not (tmp_path / "out" / "my-images.pdf").exists()

    def test_main_when_no_usable_inputs_then_exit_one(self, tmp_path):
        """Missing paths are skipped, leaving nothing to generate."""
        assert main([str(tmp_path / "missing.png"), "--output-dir", str(tmp_path)]) == 1

    def test_main_when_quality_out_of_range_then_exit_one(self, sample_image):
        assert main([str(sample_image), "--quality", "2.0"]) == 1

    def test_main_when_bad_options_file_then_exit_one(self, sample_image, tmp_path):
        options_file = tmp_path / "options.json"
        options_file.write_text("{not json")

        assert main([str(sample_image), "--options-file", str(options_file)]) == 1

    def test_main_when_unsupported_per_page_then_usage_error(self, sample_image):
        """argparse rejects values outside the supported set."""
        with pytest.raises(SystemExit) as exc_info:
            main([str(sample_image), "--per-page", "3"])
        assert exc_info.value.code == 2
