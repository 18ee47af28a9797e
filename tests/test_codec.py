from pathlib import Path

import pytest

pytest.importorskip("pyvips")
Image = pytest.importorskip("PIL.Image")

from image_resizer.errors import ImageIOError  # noqa: E402
from image_resizer.image_engine import OutOfBoundsMode, VipsImageService, default_registry  # noqa: E402

EDGE = OutOfBoundsMode.CONSTANT_EXTENSION


@pytest.fixture
def vips_service() -> VipsImageService:
    return VipsImageService()


def _write_png(path: Path, size=(8, 6), color=(200, 40, 40)) -> Path:
    Image.new("RGB", size, color=color).save(path)
    return path


def test_load_normalizes_to_uchar(tmp_path: Path, vips_service):
    src = _write_png(tmp_path / "in.png")
    image = vips_service.load(str(src))
    assert (image.width, image.height) == (8, 6)
    assert image.format == "uchar"


def test_load_grayscale_becomes_srgb(tmp_path: Path, vips_service):
    src = tmp_path / "gray.png"
    Image.new("L", (4, 4), color=128).save(src)
    image = vips_service.load(str(src))
    assert image.bands == 3


def test_load_missing_file_raises(tmp_path: Path, vips_service):
    with pytest.raises(ImageIOError) as exc:
        vips_service.load(str(tmp_path / "nope.png"))
    assert "not found" in exc.value.reason


def test_load_garbage_raises(tmp_path: Path, vips_service):
    bad = tmp_path / "bad.png"
    bad.write_bytes(b"not an image at all")
    with pytest.raises(ImageIOError):
        vips_service.load(str(bad))


def test_apply_filter_returns_new_image(tmp_path: Path, vips_service):
    image = vips_service.load(str(_write_png(tmp_path / "in.png")))
    out = vips_service.apply_filter(image, default_registry().resolve("scale2x"), 0, 0, EDGE, EDGE)
    assert (out.width, out.height) == (16, 12)
    assert (image.width, image.height) == (8, 6)


def test_generic_save_infers_format_from_extension(tmp_path: Path, vips_service):
    image = vips_service.load(str(_write_png(tmp_path / "in.png")))
    target = tmp_path / "out.tif"
    vips_service.save(image, str(target))
    with Image.open(target) as saved:
        assert saved.format == "TIFF"
        assert saved.size == (8, 6)


def test_save_unknown_extension_raises(tmp_path: Path, vips_service):
    image = vips_service.load(str(_write_png(tmp_path / "in.png")))
    with pytest.raises(ImageIOError):
        vips_service.save(image, str(tmp_path / "out.unknownext"))


def test_jpeg_quality_save(tmp_path: Path, vips_service):
    if not vips_service.has_encoder("image/jpeg"):
        pytest.skip("libvips built without JPEG support")
    image = vips_service.load(str(_write_png(tmp_path / "in.png")))
    target = tmp_path / "out.jpg"
    vips_service.save_with_quality(image, str(target), "image/jpeg", 100)
    with Image.open(target) as saved:
        assert saved.format == "JPEG"
        r, g, b = saved.getpixel((4, 3))
        assert abs(r - 200) <= 3 and abs(g - 40) <= 3 and abs(b - 40) <= 3


def test_has_encoder_unknown_mime(vips_service):
    assert vips_service.has_encoder("image/x-made-up") is False
