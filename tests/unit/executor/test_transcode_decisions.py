"""Tests for transcode planning."""

import pytest

from mediafit.executor.transcode import (
    ConvertOptions,
    FixedSeconds,
    TranscodeOptions,
    fraction_of_duration,
    plan_transcode,
)
from mediafit.geometry import (
    InvalidGeometryError,
    MediaMetadata,
    ResizeMode,
    UnresolvableGeometryError,
)


class TestPlanTranscode:
    """Tests for plan_transcode."""

    def test_no_geometry(self, landscape_meta):
        plan = plan_transcode(landscape_meta, TranscodeOptions(format="mp4"))
        assert plan.geometry is None
        assert plan.resolved is None
        assert not plan.unchanged

    def test_geometry_resolved(self, landscape_meta):
        plan = plan_transcode(landscape_meta, TranscodeOptions(geometry="320x240"))
        assert plan.geometry.mode == ResizeMode.NONE
        assert plan.resolved.size == "320x240"

    def test_no_op_geometry_marked_unchanged(self, landscape_meta):
        plan = plan_transcode(landscape_meta, TranscodeOptions(geometry="1280x960>"))
        assert plan.resolved is None
        assert plan.unchanged

    def test_existing_vf_passed_to_pad_mode(self, landscape_meta):
        options = TranscodeOptions(
            geometry="300x300#",
            convert_options=ConvertOptions(output={"vf": "hflip"}),
        )
        plan = plan_transcode(landscape_meta, options)
        assert plan.resolved.filter_fragment.endswith(",hflip")

    def test_seek_only_for_image_output(self, landscape_meta):
        video = plan_transcode(landscape_meta, TranscodeOptions(format="mp4"))
        image = plan_transcode(landscape_meta, TranscodeOptions(format="jpg"))
        assert video.seek_seconds is None
        assert image.seek_seconds == 3.0

    def test_computed_seek_resolved_once(self, landscape_meta):
        options = TranscodeOptions(format="png", time=fraction_of_duration(0.25))
        plan = plan_transcode(landscape_meta, options)
        assert plan.seek_seconds == 3.0

    def test_fixed_seek(self, landscape_meta):
        options = TranscodeOptions(format="png", time=FixedSeconds(7.5))
        assert plan_transcode(landscape_meta, options).seek_seconds == 7.5

    def test_invalid_geometry_raises(self, landscape_meta):
        with pytest.raises(InvalidGeometryError):
            plan_transcode(landscape_meta, TranscodeOptions(geometry="big"))

    def test_missing_size_raises(self):
        with pytest.raises(UnresolvableGeometryError):
            plan_transcode(MediaMetadata(), TranscodeOptions(geometry="320x240"))

    def test_missing_size_without_geometry_is_fine(self):
        plan = plan_transcode(MediaMetadata(), TranscodeOptions(format="mp4"))
        assert plan.resolved is None
