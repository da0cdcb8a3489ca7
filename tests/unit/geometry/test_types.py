"""Tests for geometry value types."""

from fractions import Fraction

from mediafit.geometry import MediaMetadata, ResolvedGeometry


class TestMediaMetadata:
    """Tests for MediaMetadata helpers."""

    def test_has_size(self):
        assert MediaMetadata(width=640, height=480).has_size
        assert not MediaMetadata(width=640).has_size
        assert not MediaMetadata(width=0, height=480).has_size

    def test_aspect_ratio_prefers_explicit_aspect(self):
        meta = MediaMetadata(width=720, height=576, aspect=Fraction(16, 9))
        assert meta.aspect_ratio == Fraction(16, 9)

    def test_aspect_ratio_derived_from_size(self):
        """Uses the exact ratio when no aspect is stored."""
        meta = MediaMetadata(width=640, height=480)
        assert meta.aspect_ratio == Fraction(4, 3)

    def test_aspect_ratio_unknown_without_size(self):
        assert MediaMetadata().aspect_ratio is None

    def test_rotation_compensation_swaps_axes(self):
        meta = MediaMetadata(width=1920, height=1080, rotation=90)
        rotated = meta.with_rotation_compensation()
        assert (rotated.width, rotated.height) == (1080, 1920)
        assert rotated.aspect == Fraction(9, 16)
        assert rotated.rotation == 90

    def test_rotation_180_also_swaps(self):
        """180 is one of the swap angles."""
        meta = MediaMetadata(width=200, height=100, rotation=180)
        rotated = meta.with_rotation_compensation()
        assert (rotated.width, rotated.height) == (100, 200)

    def test_other_rotations_unchanged(self):
        for rotation in (None, 0, 270):
            meta = MediaMetadata(width=200, height=100, rotation=rotation)
            assert meta.with_rotation_compensation() is meta


class TestResolvedGeometry:
    def test_size(self):
        assert ResolvedGeometry(width=300, height=224).size == "300x224"
