"""Tests for logo measurement and scaling."""

import asyncio

import pytest
from PIL import Image

from design2svg.core.geometry import (
    CANVAS_CENTER,
    LogoDimensions,
    Point,
    ScaledLogoBox,
    measure_logo,
    scale_to_fit,
)
from design2svg.exceptions import ImageDecodeError, InvalidGeometryError
from tests.conftest import make_logo_data_uri, make_svg_logo, make_svg_logo_data_uri


class TestScaleToFit:
    """Test scaling of logo dimensions onto the canvas."""

    def test_wide_logo(self) -> None:
        box = scale_to_fit(LogoDimensions(800, 400))
        assert box == ScaledLogoBox(400, 200)

    def test_tall_logo(self) -> None:
        box = scale_to_fit(LogoDimensions(400, 1000))
        assert box.width == pytest.approx(160)
        assert box.height == pytest.approx(400)

    def test_small_logo_is_not_scaled_up(self) -> None:
        box = scale_to_fit(LogoDimensions(100, 50))
        assert box == ScaledLogoBox(100, 50)

    def test_aspect_ratio_preserved(self) -> None:
        box = scale_to_fit(LogoDimensions(1234, 567))
        assert max(box.width, box.height) == pytest.approx(400)
        assert box.width / box.height == pytest.approx(1234 / 567)

    @pytest.mark.parametrize("width, height", [(0, 100), (100, 0), (-5, 10)])
    def test_invalid_dimensions(self, width: int, height: int) -> None:
        with pytest.raises(InvalidGeometryError):
            scale_to_fit(LogoDimensions(width, height))

    def test_custom_max_dimension(self) -> None:
        assert scale_to_fit(LogoDimensions(500, 500), 100) == ScaledLogoBox(100, 100)


class TestMeasureLogo:
    """Test decoding of logo resources."""

    def test_data_uri(self) -> None:
        dims = asyncio.run(measure_logo(make_logo_data_uri(320, 240)))
        assert dims == LogoDimensions(320, 240)

    def test_file_path(self, tmp_path) -> None:
        path = tmp_path / "logo.png"
        Image.new("RGB", (64, 32)).save(path)
        assert asyncio.run(measure_logo(str(path))) == LogoDimensions(64, 32)

    def test_undecodable_data(self) -> None:
        with pytest.raises(ImageDecodeError, match="Failed to load logo image"):
            asyncio.run(measure_logo("data:image/png;base64,AAAA"))

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(ImageDecodeError):
            asyncio.run(measure_logo(str(tmp_path / "missing.png")))

    def test_custom_loader(self) -> None:
        calls = []

        def loader(resource: str) -> Image.Image:
            calls.append(resource)
            return Image.new("RGB", (10, 20))

        dims = asyncio.run(measure_logo("logo://test", loader=loader))
        assert dims == LogoDimensions(10, 20)
        assert calls == ["logo://test"]


class TestMeasureSvgLogo:
    """Test measurement of SVG logos at their natural size."""

    def test_width_and_height(self) -> None:
        dims = asyncio.run(measure_logo(make_svg_logo_data_uri()))
        assert dims == LogoDimensions(200, 100)

    def test_viewbox_fallback(self) -> None:
        logo = make_svg_logo_data_uri(width=None, height=None, viewbox="0 0 300 150")
        assert asyncio.run(measure_logo(logo)) == LogoDimensions(300, 150)

    def test_file_path(self, tmp_path) -> None:
        path = tmp_path / "logo.svg"
        path.write_text(make_svg_logo(width=120, height=80))
        assert asyncio.run(measure_logo(str(path))) == LogoDimensions(120, 80)

    def test_malformed(self) -> None:
        logo = "data:image/svg+xml;base64,PHN2Zz48Zz48L3N2Zz4="  # <svg><g></svg>
        with pytest.raises(ImageDecodeError, match="Failed to load logo image"):
            asyncio.run(measure_logo(logo))


def test_placement_centers_box() -> None:
    box = ScaledLogoBox(400, 200)
    assert box.placement(CANVAS_CENTER) == (300, 400)
    assert box.placement(Point(0, 0)) == (-200, -100)
