"""Unit tests for image-to-display coordinate mapping."""

import pytest
from magic_lens.config import FONT_SIZE_RATIO
from magic_lens.domain.entities.recognition import RecognizedLine
from magic_lens.domain.services.coordinate_mapping import map_box_to_overlay, map_lines_to_overlays
from magic_lens.domain.value_objects.geometry import BoundingBox, ImageFrame
from magic_lens.exceptions import FrameNotReadyError


class TestMapBoxToOverlay:
    """Tests for map_box_to_overlay."""

    def test_half_size_then_full_size(self):
        box = BoundingBox(0, 0, 100, 100)
        frame = ImageFrame(1000, 1000, 500, 500)

        rect = map_box_to_overlay(box, frame)
        assert rect.left == 0
        assert rect.top == 0
        assert rect.width == pytest.approx(50)
        assert rect.height == pytest.approx(50)
        assert rect.font_size == pytest.approx(40)

        rect = map_box_to_overlay(box, frame.resized(1000, 1000))
        assert rect.width == pytest.approx(100)
        assert rect.height == pytest.approx(100)
        assert rect.font_size == pytest.approx(80)

    def test_identity_at_natural_size(self):
        box = BoundingBox(12, 34, 56, 78)
        rect = map_box_to_overlay(box, ImageFrame.at_natural_size(200, 200))
        assert (rect.left, rect.top, rect.width, rect.height) == (12, 34, 44, 44)

    def test_axes_scale_independently(self):
        box = BoundingBox(100, 100, 300, 200)
        rect = map_box_to_overlay(box, ImageFrame(1000, 500, 500, 1000))
        assert rect.left == pytest.approx(50)
        assert rect.top == pytest.approx(200)
        assert rect.width == pytest.approx(100)
        assert rect.height == pytest.approx(200)

    @pytest.mark.parametrize("factor", [0.25, 0.5, 2.0, 3.0])
    def test_linear_in_rendered_size(self, factor):
        box = BoundingBox(10, 20, 110, 70)
        base = map_box_to_overlay(box, ImageFrame(400, 400, 400, 400))
        scaled = map_box_to_overlay(box, ImageFrame(400, 400, 400 * factor, 400 * factor))
        assert scaled.left == pytest.approx(base.left * factor)
        assert scaled.top == pytest.approx(base.top * factor)
        assert scaled.width == pytest.approx(base.width * factor)
        assert scaled.height == pytest.approx(base.height * factor)
        assert scaled.font_size == pytest.approx(base.font_size * factor)

    def test_font_size_tracks_height(self):
        rect = map_box_to_overlay(BoundingBox(0, 0, 10, 25), ImageFrame(100, 100, 100, 100))
        assert rect.font_size == pytest.approx(rect.height * FONT_SIZE_RATIO)

    def test_custom_font_scale(self):
        rect = map_box_to_overlay(
            BoundingBox(0, 0, 10, 20), ImageFrame(100, 100, 100, 100), font_scale=0.5
        )
        assert rect.font_size == pytest.approx(10)

    def test_zero_size_box(self):
        rect = map_box_to_overlay(BoundingBox(5, 5, 5, 5), ImageFrame(10, 10, 20, 20))
        assert rect.width == 0
        assert rect.height == 0
        assert rect.font_size == 0

    def test_undecoded_frame_raises(self):
        with pytest.raises(FrameNotReadyError) as exc_info:
            map_box_to_overlay(BoundingBox(0, 0, 1, 1), ImageFrame(0, 0, 100, 100))
        assert exc_info.value.error_code == "PRECONDITION_ERROR"


class TestMapLinesToOverlays:
    """Tests for map_lines_to_overlays."""

    def test_preserves_order_and_trims_text(self):
        lines = [
            RecognizedLine("  first line \n", BoundingBox(0, 0, 10, 10)),
            RecognizedLine("second", BoundingBox(0, 20, 10, 30)),
        ]
        overlays = map_lines_to_overlays(lines, ImageFrame(100, 100, 50, 50))

        assert [o.text for o in overlays] == ["first line", "second"]
        assert overlays[1].rect.top == pytest.approx(10)

    def test_empty(self):
        assert map_lines_to_overlays([], ImageFrame(10, 10, 10, 10)) == []

    def test_undecoded_frame_raises(self):
        with pytest.raises(FrameNotReadyError):
            map_lines_to_overlays([], ImageFrame(0, 10, 10, 10))
