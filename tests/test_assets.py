"""Tests for image conversion."""

import pytest
from PIL import Image as PILImage

from conftest import make_entry
from yomichan_kindle.assets import (
    FilenameGenerator,
    collect_image_paths,
    convert_images,
    copy_cover_image,
    output_name,
)
from yomichan_kindle.yomichan import ContentList, Element, Image


def test_filename_generator():
    generator = FilenameGenerator()
    names = [generator.generate() for _ in range(17)]
    assert names[:3] == ["0", "1", "2"]
    assert names[10] == "a"
    assert names[16] == "10"


def test_output_name():
    generator = FilenameGenerator()
    assert output_name("img/a.PNG", generator) == "0.png"
    assert output_name("img/b.bmp", generator) == "1.jpg"
    assert output_name("img/c.jpeg", generator) == "2.jpeg"


def test_collect_image_paths():
    first = make_entry("a")
    first.definitions = [
        ContentList([Image(path="a.png"), Element("div", content=Image(path="b.png"))]),
    ]
    second = make_entry("b")
    second.definitions = [Image(path="a.png", standalone=True), Image(path="c.gif")]
    assert collect_image_paths([first, second]) == ["a.png", "b.png", "c.gif"]


@pytest.fixture
def images_dir(tmp_path):
    directory = tmp_path / "dict" / "img"
    directory.mkdir(parents=True)
    PILImage.new("RGBA", (4, 4), (255, 0, 0, 128)).save(directory / "a.png")
    PILImage.new("RGB", (4, 4), (0, 0, 255)).save(directory / "b.bmp")
    (directory / "c.gif").write_bytes(b"not an image")
    return tmp_path / "dict"


def test_convert_images(images_dir, tmp_path):
    output = tmp_path / "out"
    path_map = convert_images(images_dir, output, ["img/a.png", "img/b.bmp", "img/c.gif"], batch_size=2)

    assert path_map == {"img/a.png": "i/0.png", "img/b.bmp": "i/1.jpg", "img/c.gif": "i/2.gif"}

    with PILImage.open(output / "i" / "0.png") as image:
        assert image.format == "PNG"
    with PILImage.open(output / "i" / "1.jpg") as image:
        assert image.format == "JPEG"
        assert image.mode == "RGB"
    assert (output / "i" / "2.gif").read_bytes() == b"not an image"


def test_convert_transparent_to_jpeg(images_dir, tmp_path):
    (images_dir / "img" / "a.png").rename(images_dir / "img" / "a.webp")
    output = tmp_path / "out"
    path_map = convert_images(images_dir, output, ["img/a.webp"])
    with PILImage.open(output / path_map["img/a.webp"]) as image:
        assert image.format == "JPEG"
        red, green, blue = image.getpixel((0, 0))
        assert red > 200 and green > 100 and blue > 100


def test_missing_image(images_dir, tmp_path):
    with pytest.raises(FileNotFoundError):
        convert_images(images_dir, tmp_path / "out", ["img/missing.png"])


def test_no_images(tmp_path):
    assert convert_images(tmp_path, tmp_path / "out", []) == {}


def test_copy_cover_image(tmp_path):
    cover = tmp_path / "my cover.jpg"
    cover.write_bytes(b"jpeg")
    output = tmp_path / "out"
    assert copy_cover_image(cover, output) == "cover.jpg"
    assert (output / "cover.jpg").read_bytes() == b"jpeg"


def test_copy_missing_cover_image(tmp_path):
    with pytest.raises(FileNotFoundError):
        copy_cover_image(tmp_path / "missing.jpg", tmp_path / "out")


def test_transparency_flattened_for_png(tmp_path):
    source = tmp_path / "dict"
    source.mkdir()
    PILImage.new("RGBA", (4, 4), (0, 0, 0, 0)).save(source / "clear.png")
    output = tmp_path / "out"
    path_map = convert_images(source, output, ["clear.png"])

    assert path_map == {"clear.png": "i/0.png"}
    with PILImage.open(output / "i" / "0.png") as image:
        assert image.mode == "RGB"
        assert image.getpixel((0, 0)) == (255, 255, 255)


def test_transparency_flattened_for_gif(tmp_path):
    source = tmp_path / "dict"
    source.mkdir()
    PILImage.new("RGBA", (4, 4), (0, 0, 0, 0)).save(source / "clear.png")
    (source / "clear.png").rename(source / "clear.gif")
    output = tmp_path / "out"
    convert_images(source, output, ["clear.gif"])

    with PILImage.open(output / "i" / "0.gif") as image:
        assert "transparency" not in image.info
        assert image.convert("RGB").getpixel((0, 0)) == (255, 255, 255)


def test_svg_rasterized_to_jpeg(tmp_path):
    source = tmp_path / "dict"
    source.mkdir()
    (source / "figure.svg").write_text(
        '<svg xmlns="http://www.w3.org/2000/svg" width="8" height="8">'
        '<rect width="8" height="8" fill="#0000ff"/></svg>',
        encoding="utf-8",
    )
    output = tmp_path / "out"
    path_map = convert_images(source, output, ["figure.svg"])

    assert path_map == {"figure.svg": "i/0.jpg"}
    assert (output / "i" / "0.jpg").read_bytes()[:2] == b"\xff\xd8"
    with PILImage.open(output / "i" / "0.jpg") as image:
        assert image.format == "JPEG"
        assert image.size == (8, 8)
        red, green, blue = image.getpixel((4, 4))
        assert blue > 200 and red < 60 and green < 60


def test_transparent_svg_background_is_white(tmp_path):
    source = tmp_path / "dict"
    source.mkdir()
    (source / "empty.svg").write_text(
        '<svg xmlns="http://www.w3.org/2000/svg" width="4" height="4"></svg>',
        encoding="utf-8",
    )
    output = tmp_path / "out"
    convert_images(source, output, ["empty.svg"])
    with PILImage.open(output / "i" / "0.jpg") as image:
        assert all(channel > 245 for channel in image.getpixel((1, 1)))
