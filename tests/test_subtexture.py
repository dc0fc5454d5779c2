import pytest

from emerald.subtexture import SubTexture2D, Texture2D


def test_set_data_accepts_full_rgba():
    texture = Texture2D(1, 1)
    texture.set_data(b"\xff\xff\xff\xff")
    assert texture.data == b"\xff\xff\xff\xff"


def test_set_data_rejects_partial_data():
    texture = Texture2D(2, 2)
    with pytest.raises(ValueError):
        texture.set_data(b"\x00" * 4)


def test_set_data_rgb_uses_three_bytes():
    texture = Texture2D(2, 1, channels=3)
    texture.set_data(b"\x01" * 6)
    assert texture.data == b"\x01" * 6
    with pytest.raises(ValueError):
        texture.set_data(b"\x01" * 8)


def test_textures_compare_by_identity():
    first = Texture2D(4, 4)
    second = Texture2D(4, 4)
    assert first == first
    assert first != second


def test_corner_order():
    texture = Texture2D(8, 8)
    sub = SubTexture2D(texture, (0.1, 0.2), (0.3, 0.4))
    assert sub.texture is texture
    assert sub.texture_coords == ((0.1, 0.2), (0.3, 0.2), (0.3, 0.4), (0.1, 0.4))


def test_from_coords_whole_texture():
    texture = Texture2D(64, 32)
    sub = SubTexture2D.from_coords(texture, (0, 0), (64, 32))
    assert sub.texture_coords[0] == (0.0, 0.0)
    assert sub.texture_coords[2] == (1.0, 1.0)


def test_from_coords_maps_back_to_pixels():
    texture = Texture2D(128, 64)
    sub = SubTexture2D.from_coords(texture, (3, 2), (16, 8), (2, 3))
    (min_x, min_y), _, (max_x, max_y), _ = sub.texture_coords
    assert min_x * texture.width == pytest.approx(3 * 16)
    assert min_y * texture.height == pytest.approx(2 * 8)
    assert max_x * texture.width == pytest.approx((3 + 2) * 16)
    assert max_y * texture.height == pytest.approx((2 + 3) * 8)


def test_from_coords_default_sprite_is_one_cell():
    texture = Texture2D(64, 64)
    one = SubTexture2D.from_coords(texture, (1, 1), (16, 16))
    explicit = SubTexture2D.from_coords(texture, (1, 1), (16, 16), (1, 1))
    assert one.texture_coords == explicit.texture_coords