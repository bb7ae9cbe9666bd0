"""Tests for geometric transforms."""

import math

import pytest
from PIL import Image, ImageDraw

from imprint.core.transforms import (
    as_rgba,
    composite_at,
    crop,
    crop_exact,
    paper_paste,
    rotate,
    scale,
    scale_exact,
    stamp,
)
from imprint.domain import BLACK, CLEAR

RED = (255, 0, 0, 255)


class TestScale:
    """Tests for scale and scale_exact."""

    def test_scale_rounds_dimensions(self, make_image) -> None:
        """Test rounding of scaled dimensions."""
        assert scale(make_image((101, 51)), 0.5).size == (50, 26)

    def test_scale_identity_keeps_size(self, make_gradient) -> None:
        """Test that factor 1.0 keeps dimensions."""
        image = make_gradient((37, 23))
        assert scale(image, 1.0).size == (37, 23)

    def test_scale_up(self, make_image) -> None:
        """Test enlarging."""
        assert scale(make_image((10, 20)), 2.5).size == (25, 50)

    def test_scale_exact_ignores_aspect(self, make_image) -> None:
        """Test resizing to arbitrary dimensions."""
        assert scale_exact(make_image((10, 20)), 300, 7).size == (300, 7)

    def test_scale_to_nothing_is_clamped(self, make_image) -> None:
        """Test that degenerate targets keep at least one pixel."""
        assert scale(make_image((10, 10)), 0.0).size == (1, 1)

    def test_scale_does_not_mutate_input(self, make_image) -> None:
        """Test that the source image is untouched."""
        image = make_image((10, 10))
        scale(image, 2.0)
        assert image.size == (10, 10)

    def test_scale_converts_to_rgba(self) -> None:
        """Test that non-RGBA input comes back as RGBA."""
        image = Image.new("RGB", (8, 8), (1, 2, 3))
        assert scale(image, 2.0).mode == "RGBA"


class TestRotate:
    """Tests for rotate."""

    def test_rotate_keeps_size(self, make_image) -> None:
        """Test that rotation never changes dimensions."""
        assert rotate(make_image((120, 80)), 0.3).size == (120, 80)

    def test_exposed_corners_are_black(self) -> None:
        """Test the opaque black background fill."""
        image = Image.new("RGBA", (101, 101), (255, 255, 255, 255))
        rotated = rotate(image, math.pi / 4)
        assert rotated.getpixel((0, 0)) == BLACK

    def test_custom_fill(self) -> None:
        """Test a transparent fill for compositable canvases."""
        image = Image.new("RGBA", (101, 101), (255, 255, 255, 255))
        rotated = rotate(image, math.pi / 4, fill=CLEAR)
        assert rotated.getpixel((0, 0)) == CLEAR

    def test_positive_angle_is_clockwise(self) -> None:
        """Test rotation direction on screen."""
        image = Image.new("RGBA", (101, 101), BLACK)
        ImageDraw.Draw(image).rectangle((80, 44, 96, 56), fill=(255, 255, 255, 255))

        rotated = rotate(image, math.pi / 2)

        # A marker right of center ends up below center
        assert rotated.getpixel((50, 88))[0] > 200
        assert rotated.getpixel((88, 50))[0] < 50


class TestCrop:
    """Tests for crop and crop_exact."""

    def test_crop_fraction(self, make_image) -> None:
        """Test fractional crop size."""
        assert crop(make_image((100, 80)), 0.5, 0.25).size == (50, 20)

    def test_crop_truncates(self, make_image) -> None:
        """Test that fractional pixels are truncated."""
        assert crop(make_image((99, 99)), 0.9, 0.9).size == (89, 89)

    def test_crop_is_centered(self, make_image) -> None:
        """Test the centering offsets."""
        image = make_image((100, 80))
        image.putpixel((25, 20), RED)

        cropped = crop_exact(image, 50, 40)

        assert cropped.getpixel((0, 0)) == RED

    def test_crop_odd_offset_floors(self, make_image) -> None:
        """Test floor division of odd size differences."""
        image = make_image((11, 11))
        image.putpixel((1, 1), RED)
        assert crop_exact(image, 8, 8).getpixel((0, 0)) == RED

    def test_oversized_crop_is_padded(self, make_image) -> None:
        """Test that a crop larger than the source overhangs it."""
        image = make_image((10, 10), RED)

        cropped = crop_exact(image, 20, 20)

        assert cropped.size == (20, 20)
        assert cropped.getpixel((0, 0)) == CLEAR
        assert cropped.getpixel((5, 5)) == RED
        assert cropped.getpixel((14, 14)) == RED
        assert cropped.getpixel((15, 15)) == CLEAR

    def test_oversized_fraction(self, make_image) -> None:
        """Test that fractions above 1 are absorbed, not rejected."""
        assert crop(make_image((10, 10)), 1.5, 1.0).size == (15, 10)

    def test_negative_crop_is_empty(self, make_image) -> None:
        """Test that negative targets clamp to zero."""
        assert crop_exact(make_image((10, 10)), -5, 4).size == (0, 4)


class TestPaperPaste:
    """Tests for paper_paste."""

    def test_paste_onto_paper(self, make_image) -> None:
        """Test paper size, offset and transparent surroundings."""
        image = make_image((10, 6), RED)

        paper = paper_paste(image, 40, 30, 5, 7)

        assert paper.size == (40, 30)
        assert paper.getpixel((5, 7)) == RED
        assert paper.getpixel((14, 12)) == RED
        assert paper.getpixel((4, 7)) == CLEAR
        assert paper.getpixel((15, 12)) == CLEAR
        assert paper.getchannel("A").getbbox() == (5, 7, 15, 13)

    def test_paste_keeps_translucent_pixels(self, make_image) -> None:
        """Test that pasted pixels are copied, not blended."""
        image = make_image((4, 4), (10, 20, 30, 40))
        assert paper_paste(image, 8, 8, 2, 2).getpixel((2, 2)) == (10, 20, 30, 40)

    def test_paste_past_edge_is_clipped(self, make_image) -> None:
        """Test that content beyond the paper is dropped."""
        paper = paper_paste(make_image((10, 10), RED), 12, 12, 8, 8)
        assert paper.size == (12, 12)
        assert paper.getpixel((11, 11)) == RED

    def test_crop_then_paste_round_trip(self, make_gradient) -> None:
        """Test that pasting at the origin of same-size paper is lossless."""
        cropped = crop_exact(make_gradient((64, 48)), 40, 30)
        pasted = paper_paste(cropped, 40, 30, 0, 0)
        assert pasted.size == (40, 30)
        assert pasted.tobytes() == cropped.tobytes()


class TestComposite:
    """Tests for composite_at and stamp."""

    def test_opaque_overlay_replaces(self, make_image) -> None:
        """Test that opaque pixels win."""
        result = composite_at(make_image((10, 10)), make_image((2, 2), RED), 3, 3)
        assert result.getpixel((3, 3)) == RED
        assert result.getpixel((5, 5)) != RED

    def test_transparent_overlay_leaves_base(self, make_image) -> None:
        """Test that transparent pixels leave the base unchanged."""
        base = make_image((10, 10))
        result = composite_at(base, make_image((10, 10), CLEAR), 0, 0)
        assert result.tobytes() == base.tobytes()

    def test_half_transparent_blends(self, make_image) -> None:
        """Test source-over blending."""
        base = make_image((4, 4), (0, 0, 255, 255))
        result = composite_at(base, make_image((4, 4), (255, 0, 0, 128)), 0, 0)
        r, _g, b, a = result.getpixel((0, 0))
        assert a == 255
        assert r == pytest.approx(128, abs=2)
        assert b == pytest.approx(127, abs=2)

    def test_negative_offset_is_clipped(self, make_image) -> None:
        """Test an overlay hanging off the top-left corner."""
        result = composite_at(make_image((10, 10)), make_image((4, 4), RED), -2, -2)
        assert result.getpixel((1, 1)) == RED
        assert result.getpixel((2, 2)) != RED

    def test_overlay_outside_is_ignored(self, make_image) -> None:
        """Test overlays entirely outside the base."""
        base = make_image((10, 10))
        assert composite_at(base, make_image((4, 4), RED), 20, 0).tobytes() == base.tobytes()
        assert composite_at(base, make_image((4, 4), RED), -5, 0).tobytes() == base.tobytes()

    def test_stamp_does_not_mutate_base(self, make_image) -> None:
        """Test that stamping returns a new image."""
        base = make_image((10, 10))
        before = base.tobytes()
        stamped = stamp(base, make_image((3, 3), RED), 8, 8)
        assert base.tobytes() == before
        assert stamped.getpixel((9, 9)) == RED
        assert stamped.size == (10, 10)


def test_as_rgba_returns_same_object_for_rgba(make_image) -> None:
    """Test that RGBA images are not copied needlessly."""
    image = make_image((2, 2))
    assert as_rgba(image) is image
    assert as_rgba(Image.new("L", (2, 2))).mode == "RGBA"
