import random

import pytest
from PIL import Image

from moggu import filters


def _image(width, height, seed=1):
    rng = random.Random(seed)
    img = Image.new("RGB", (width, height))
    img.putdata(
        [(rng.randrange(256), rng.randrange(256), rng.randrange(256)) for _ in range(width * height)]
    )
    return img


def _pixels(img):
    data = img.convert("RGB").tobytes()
    return list(zip(data[0::3], data[1::3], data[2::3]))


def test_rotate90_moves_pixels_clockwise():
    img = _image(4, 3)
    out = filters.rotate90(img)
    assert out.size == (3, 4)
    for y in range(3):
        for x in range(4):
            assert out.getpixel((3 - 1 - y, x)) == img.getpixel((x, y))


def test_rotate270_moves_pixels_counterclockwise():
    img = _image(4, 3)
    out = filters.rotate270(img)
    assert out.size == (3, 4)
    for y in range(3):
        for x in range(4):
            assert out.getpixel((y, 4 - 1 - x)) == img.getpixel((x, y))


def test_rotations_compose_to_identity():
    img = _image(5, 2)
    assert _pixels(filters.rotate270(filters.rotate90(img))) == _pixels(img)
    assert _pixels(filters.rotate180(filters.rotate180(img))) == _pixels(img)


def test_rotate180_is_both_flips():
    img = _image(5, 4)
    both = filters.flip_vertical(filters.flip_horizontal(img))
    assert _pixels(filters.rotate180(img)) == _pixels(both)


def test_flips_mirror_and_are_involutions():
    img = _image(4, 3)
    h = filters.flip_horizontal(img)
    v = filters.flip_vertical(img)
    for y in range(3):
        for x in range(4):
            assert h.getpixel((4 - 1 - x, y)) == img.getpixel((x, y))
            assert v.getpixel((x, 3 - 1 - y)) == img.getpixel((x, y))
    assert _pixels(filters.flip_horizontal(h)) == _pixels(img)
    assert _pixels(filters.flip_vertical(v)) == _pixels(img)


def test_flip_drops_alpha():
    img = Image.new("RGBA", (2, 2), (10, 20, 30, 0))
    assert filters.flip_horizontal(img).mode == "RGB"
    assert filters.flip_horizontal(img).getpixel((0, 0)) == (10, 20, 30)


def test_box_blur_radius_zero_is_identity():
    img = _image(5, 4)
    assert _pixels(filters.box_blur(img, 0)) == _pixels(img)


def test_box_blur_uniform_image_unchanged():
    img = Image.new("RGB", (6, 5), (40, 90, 200))
    assert set(_pixels(filters.box_blur(img, 2))) == {(40, 90, 200)}


def test_box_blur_large_radius_averages_whole_image():
    img = _image(3, 3)
    pixels = _pixels(img)
    expected = tuple(sum(p[c] for p in pixels) // len(pixels) for c in range(3))
    assert set(_pixels(filters.box_blur(img, 10))) == {expected}


def test_box_blur_negative_radius_raises():
    with pytest.raises(ValueError):
        filters.box_blur(_image(2, 2), -1)


def test_sharpen_leaves_border_black_and_uniform_interior():
    img = Image.new("RGB", (5, 5), (100, 150, 200))
    out = filters.sharpen(img, 1.0)
    assert out.getpixel((0, 0)) == (0, 0, 0)
    assert out.getpixel((4, 2)) == (0, 0, 0)
    assert out.getpixel((2, 2)) == (100, 150, 200)


def test_sharpen_strength_zero_keeps_interior():
    img = _image(4, 4)
    out = filters.sharpen(img, 0.0)
    for y in range(1, 3):
        for x in range(1, 3):
            assert out.getpixel((x, y)) == img.getpixel((x, y))


def test_brightness_clamps():
    img = Image.new("RGB", (1, 1), (250, 5, 100))
    assert filters.adjust_brightness(img, 10).getpixel((0, 0)) == (255, 15, 110)
    assert filters.adjust_brightness(img, -10).getpixel((0, 0)) == (240, 0, 90)


def test_contrast_identity_and_zero():
    img = _image(3, 3)
    assert _pixels(filters.adjust_contrast(img, 1.0)) == _pixels(img)
    assert set(_pixels(filters.adjust_contrast(img, 0.0))) == {(128, 128, 128)}


def test_contrast_stays_in_range():
    img = _image(4, 4)
    out = _pixels(filters.adjust_contrast(img, 10.0))
    assert all(v in (0, 255) or v == 128 for p in out for v in p)


def test_hsl_of_pure_red():
    assert filters.rgb_to_hsl(255, 0, 0) == (0.0, 1.0, 0.5)
    assert filters.hsl_to_rgb(0.0, 1.0, 0.5) == (255, 0, 0)


def test_hsl_of_gray_has_no_saturation():
    h, s, l = filters.rgb_to_hsl(128, 128, 128)
    assert (h, s) == (0.0, 0.0)
    assert filters.hsl_to_rgb(h, s, l) == (128, 128, 128)


@pytest.mark.parametrize("rgb", [(0, 255, 0), (0, 0, 255), (200, 100, 50), (12, 240, 99)])
def test_hsl_round_trip(rgb):
    back = filters.hsl_to_rgb(*filters.rgb_to_hsl(*rgb))
    assert all(abs(a - b) <= 1 for a, b in zip(rgb, back))


def test_saturation_zero_gives_gray():
    out = _pixels(filters.adjust_saturation(_image(4, 4), 0.0))
    assert all(r == g == b for r, g, b in out)


def test_saturation_one_nearly_preserves():
    img = _image(3, 3)
    for a, b in zip(_pixels(filters.adjust_saturation(img, 1.0)), _pixels(img)):
        assert all(abs(x - y) <= 1 for x, y in zip(a, b))


def test_invert_is_involution():
    img = _image(4, 3)
    out = filters.invert_colors(img)
    assert out.getpixel((0, 0)) == tuple(255 - v for v in img.getpixel((0, 0)))
    assert _pixels(filters.invert_colors(out)) == _pixels(img)


def test_sepia_black_stays_black_and_channels_ordered():
    assert filters.apply_sepia(Image.new("RGB", (1, 1))).getpixel((0, 0)) == (0, 0, 0)
    for r, g, b in _pixels(filters.apply_sepia(_image(5, 5))):
        assert r >= g >= b


def test_vignette_zero_strength_is_identity():
    img = _image(4, 4)
    assert _pixels(filters.apply_vignette(img, 0.0)) == _pixels(img)


def test_vignette_darkens_corners_not_center():
    img = Image.new("RGB", (4, 4), (200, 200, 200))
    out = filters.apply_vignette(img, 1.0)
    assert out.getpixel((2, 2)) == (200, 200, 200)
    assert out.getpixel((0, 0))[0] < 200


def test_noise_zero_is_identity():
    img = _image(3, 3)
    assert _pixels(filters.add_noise(img, 0, random.Random(3))) == _pixels(img)


def test_noise_bounded_and_same_offset_per_pixel():
    img = Image.new("RGB", (5, 5), (100, 120, 140))
    out = _pixels(filters.add_noise(img, 10, random.Random(7)))
    for r, g, b in out:
        assert -10 <= r - 100 <= 10
        assert r - 100 == g - 120 == b - 140


def test_noise_is_reproducible_with_seed():
    img = _image(4, 4)
    a = filters.add_noise(img, 30, random.Random(5))
    b = filters.add_noise(img, 30, random.Random(5))
    assert _pixels(a) == _pixels(b)


def test_noise_rejects_out_of_range_strength():
    with pytest.raises(ValueError):
        filters.add_noise(_image(2, 2), 256)


def test_gaussian_blur_uniform_image_unchanged():
    img = Image.new("RGB", (8, 8), (30, 60, 90))
    out = filters.gaussian_blur(img, 2.0)
    assert out.mode == "RGB"
    assert set(_pixels(out)) == {(30, 60, 90)}


def test_grayscale_of_gray_and_extremes():
    img = Image.new("RGB", (3, 1))
    img.putdata([(0, 0, 0), (100, 100, 100), (255, 255, 255)])
    out = filters.grayscale(img)
    assert out.mode == "L"
    assert list(out.tobytes()) == [0, 100, 255]


def test_grayscale_keeps_alpha():
    img = Image.new("RGBA", (1, 1), (100, 100, 100, 7))
    out = filters.grayscale(img)
    assert out.mode == "LA"
    assert out.getpixel((0, 0)) == (100, 7)