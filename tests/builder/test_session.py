"""
Tests for builder.session

Test Coverage:
- ImageSession: adding, filtering, ordering, removal, estimates
- PreviewHandle: acquisition and release through the session lifecycle
"""

import pytest

from image_pdf_toolkit.builder.output import MemorySaveSink
from image_pdf_toolkit.builder.session import ImageSession, PreviewHandle, is_supported_image
from image_pdf_toolkit.core.models import ImageAsset, LayoutOptions


@pytest.mark.parametrize("name, supported", [
    ("a.jpg", True), ("a.JPEG", True), ("a.png", True), ("a.gif", True),
    ("a.bmp", True), ("a.webp", True), ("a.txt", False), ("a.pdf", False), ("noext", False),
])
def test_is_supported_image_when_extension_then_expected(tmp_path, name, supported):
    assert is_supported_image(tmp_path / name) is supported


class TestAdding:
    """Tests for add_files() and add_folder()."""

    def test_add_files_when_unsupported_mixed_in_then_skipped(self, image_files, tmp_path, caplog):
        """Non-image files are skipped with a warning."""
        # Arrange
        images = image_files([(10, 10), (20, 10)])
        notes = tmp_path / "notes.txt"
        notes.write_text("hello")

        # Act
        with ImageSession() as session:
            added = session.add_files([images[0], notes, images[1]])

            # Assert
            assert [a.name for a in added] == ["img_00.png", "img_01.png"]
            assert len(session) == 2
        assert "Skipping unsupported file: notes.txt" in caplog.text

    def test_add_files_when_added_then_unique_ids_and_byte_sizes(self, image_files):
        """Every asset gets its own id and its file size."""
        paths = image_files([(10, 10)] * 4)

        with ImageSession(make_previews=False) as session:
            session.add_files(paths)
            ids = [a.id for a in session.assets]

            assert len(set(ids)) == 4
            assert all(a.byte_size == p.stat().st_size for a, p in zip(session.assets, paths))

    def test_add_folder_when_files_then_sorted_by_name(self, tmp_path, image_files):
        """Folder contents are added in name order."""
        # Arrange
        image_files([(10, 10)] * 3)
        (tmp_path / "readme.md").write_text("x")

        # Act
        with ImageSession(make_previews=False) as session:
            session.add_folder(tmp_path)

            # Assert
            assert [a.name for a in session.assets] == ["img_00.png", "img_01.png", "img_02.png"]

    def test_add_folder_when_not_a_folder_then_error(self, sample_image):
        with pytest.raises(NotADirectoryError):
            ImageSession().add_folder(sample_image)


class TestEditing:
    """Tests for remove(), move() and clear()."""

    @pytest.fixture
    def session(self, image_files):
        session = ImageSession()
        session.add_files(image_files([(10 + i, 10) for i in range(4)]))
        yield session
        session.close()

    def test_move_when_valid_then_reordered(self, session):
        names = [a.name for a in session.assets]

        session.move(3, 0)

        assert [a.name for a in session.assets] == [names[3], names[0], names[1], names[2]]

    def test_move_when_target_past_end_then_clamped(self, session):
        first = session.assets[0]

        session.move(0, 99)

        assert session.assets[-1] == first

    def test_move_when_source_out_of_range_then_index_error(self, session):
        with pytest.raises(IndexError):
            session.move(4, 0)

    def test_remove_when_present_then_preview_released(self, session):
        """Removing an image drops its preview."""
        # Arrange
        target = session.assets[1]
        assert session.preview(target.id) is not None

        # Act
        removed = session.remove(target.id)

        # Assert
        assert removed is True
        assert len(session) == 3
        assert session.preview(target.id) is None

    def test_remove_when_unknown_then_false(self, session):
        assert session.remove("missing") is False
        assert len(session) == 4

    def test_clear_when_called_then_empty(self, session):
        ids = [a.id for a in session.assets]

        session.clear()

        assert len(session) == 0
        assert all(session.preview(i) is None for i in ids)


class TestPreviewHandle:
    """Tests for preview ownership."""

    def test_acquire_when_image_then_thumbnail_within_size(self, image_files):
        path = image_files([(1000, 500)])[0]

        handle = PreviewHandle.acquire(ImageAsset.from_path(path), (100, 100))

        assert handle.image.size == (100, 50)
        handle.release()
        assert handle.is_released
        handle.release()

    def test_acquire_when_exif_rotated_then_upright_thumbnail(self, rotated_jpeg):
        """Previews show photos the way they are displayed."""
        handle = PreviewHandle.acquire(ImageAsset.from_path(rotated_jpeg), (100, 100))

        assert handle.image.size == (75, 100)

    def test_acquire_when_unreadable_then_empty_handle(self, tmp_path):
        """A bad file yields no preview instead of an error."""
        path = tmp_path / "bad.png"
        path.write_bytes(b"garbage")

        handle = PreviewHandle.acquire(ImageAsset.from_path(path))

        assert handle.image is None

    def test_context_manager_when_error_raised_then_previews_released(self, image_files):
        """Previews are released even when the block raises."""
        # Arrange
        handles = []

        # Act
        with pytest.raises(RuntimeError):
            with ImageSession() as session:
                session.add_files(image_files([(10, 10), (12, 10)]))
                handles = list(session._previews.values())
                raise RuntimeError("boom")

        # Assert
        assert len(handles) == 2
        assert all(h.is_released for h in handles)


class TestEstimatesAndGeneration:
    """Tests for estimates and generate()."""

    def test_estimated_size_when_empty_then_zero_kb(self):
        assert ImageSession().estimated_size(LayoutOptions()) == "0 KB"

    def test_estimated_pages_when_five_images_four_per_page_then_two(self, image_files):
        with ImageSession(make_previews=False) as session:
            session.add_files(image_files([(10, 10)] * 5))

            assert session.estimated_pages(LayoutOptions(images_per_page=4)) == 2
            assert session.estimated_size(LayoutOptions()).endswith("KB")

    def test_generate_when_images_then_order_respected(self, image_files):
        """generate() uses the session's current order."""
        # Arrange
        sink = MemorySaveSink()
        with ImageSession(make_previews=False) as session:
            session.add_files(image_files([(10, 10), (30, 10)]))
            session.move(1, 0)

            # Act
            result = session.generate(LayoutOptions(images_per_page=2), sink=sink)

        # Assert
        assert result.page_count == 1
        assert result.image_count == 2
        assert "my-images.pdf" in sink.files
