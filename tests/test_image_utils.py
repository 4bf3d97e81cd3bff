"""Tests for image encoding helpers."""

import pytest
from PIL import Image

from design2svg import image_utils
from tests.conftest import make_svg_logo, make_svg_logo_data_uri


@pytest.fixture
def transparent_image() -> Image.Image:
    return Image.new("RGBA", (8, 8), (0, 0, 0, 0))


class TestEncoding:
    @pytest.mark.parametrize(
        "name, expected", [("png", "PNG"), ("jpg", "JPEG"), ("JPEG", "JPEG")]
    )
    def test_normalize_format(self, name: str, expected: str) -> None:
        assert image_utils.normalize_format(name) == expected

    def test_png_data_uri(self) -> None:
        image = Image.new("RGBA", (3, 2), (10, 20, 30, 40))
        data_uri = image_utils.encode_data_uri(image)
        assert data_uri.startswith("data:image/png;base64,")
        decoded = image_utils.decode_data_uri(data_uri)
        assert decoded.size == (3, 2)
        assert decoded.getpixel((0, 0)) == (10, 20, 30, 40)

    def test_jpeg_flattens_alpha(self, transparent_image: Image.Image) -> None:
        data = image_utils.encode_image(transparent_image, "jpeg")
        image = image_utils.decode_image(data)
        assert image.mode == "RGB"
        assert all(channel > 250 for channel in image.getpixel((4, 4)))

    def test_decode_mode(self) -> None:
        data = image_utils.encode_image(Image.new("RGB", (2, 2)))
        assert image_utils.decode_image(data, mode="RGBA").mode == "RGBA"


class TestDataUri:
    def test_split(self) -> None:
        media_type, data = image_utils.decode_data_uri_bytes(
            "data:font/woff2;base64,YWJj"
        )
        assert media_type == "font/woff2"
        assert data == b"abc"

    @pytest.mark.parametrize(
        "data_uri",
        [
            "https://example.com/logo.png",
            "data:image/png,rawdata",
            "data:image/png;base64,***",
        ],
    )
    def test_invalid(self, data_uri: str) -> None:
        with pytest.raises(ValueError):
            image_utils.decode_data_uri_bytes(data_uri)


class TestLoadImage:
    def test_data_uri(self) -> None:
        data_uri = image_utils.encode_data_uri(Image.new("RGB", (5, 4)))
        assert image_utils.load_image(data_uri).size == (5, 4)

    def test_file(self, tmp_path) -> None:
        path = tmp_path / "logo.png"
        Image.new("RGB", (7, 3)).save(path)
        assert image_utils.load_image(str(path)).size == (7, 3)

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(FileNotFoundError):
            image_utils.load_image(str(tmp_path / "missing.png"))

    def test_svg_data_uri(self) -> None:
        image = image_utils.load_image(make_svg_logo_data_uri(width=40, height=30))
        assert image.size == (40, 30)
        assert image.getpixel((35, 25))[3] == 255

    def test_svg_sniffed_without_extension(self, tmp_path) -> None:
        path = tmp_path / "logo"
        path.write_text('<?xml version="1.0"?>\n' + make_svg_logo(width=16, height=8))
        assert image_utils.load_image(str(path)).size == (16, 8)

    def test_svg_wrong_root(self) -> None:
        with pytest.raises(ValueError, match="Not an SVG image"):
            image_utils.decode_svg(b"<html></html>")


@pytest.mark.parametrize(
    "data, expected",
    [
        (b"<svg xmlns=\"http://www.w3.org/2000/svg\"/>", True),
        (b"\xef\xbb\xbf  <?xml version=\"1.0\"?><svg/>", True),
        (b"\x89PNG\r\n\x1a\n", False),
        (b"<html></html>", False),
    ],
)
def test_is_svg(data: bytes, expected: bool) -> None:
    assert image_utils.is_svg(data) is expected

