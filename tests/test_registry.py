from image_resizer.image_engine.registry import FilterRegistry, default_registry

from conftest import FakeFilter


def test_resolve_is_case_insensitive():
    pixel = FakeFilter("Pixel")
    reg = FilterRegistry([pixel, FakeFilter("Scale2x")])

    assert reg.resolve("pixel") is pixel
    assert reg.resolve("PIXEL") is pixel
    assert reg.resolve("Pixel") is pixel
    assert reg.resolve("pixels") is None


def test_first_registered_wins_on_name_collision():
    first = FakeFilter("Pixel")
    second = FakeFilter("PIXEL")
    reg = FilterRegistry([first, second])

    assert reg.resolve("pixel") is first
    # Both stay listed for the help transcript
    assert reg.names() == ["Pixel", "PIXEL"]
    assert len(reg) == 2


def test_default_registry_order():
    reg = default_registry()
    assert reg.names() == [
        "Pixel",
        "Bilinear",
        "Bicubic",
        "Mitchell",
        "Lanczos2",
        "Lanczos3",
        "Scale2x",
        "Scale3x",
        "Eagle2x",
    ]
    assert reg.resolve("scale2x").scale == 2
    assert reg.resolve("SCALE3X").scale == 3
