"""
Image assets of a Yomichan dictionary.

Images referenced by definitions are converted to formats Kindle can show,
renamed to short generated names and copied under the output directory.
The resulting path map is handed to the renderer.
"""

import io
import logging
import shutil
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Dict, Iterable, List, Tuple

import cairosvg
from PIL import Image as PILImage, UnidentifiedImageError

from yomichan_kindle.constants import DEFAULT_IMAGE_QUALITY, IMAGE_BATCH_SIZE, IMAGE_OUTPUT_DIR
from yomichan_kindle.yomichan import DictionaryEntry, iter_images

logger = logging.getLogger(__name__)

# Extensions kept as they are; anything else becomes JPEG
SUPPORTED_EXTENSIONS = {'.gif': 'GIF', '.jpg': 'JPEG', '.jpeg': 'JPEG', '.png': 'PNG'}


class FilenameGenerator:
    """
    Generate short unique file names.

    Hexadecimal rather than base 36, so no name collides with a reserved
    Windows device name (con, aux, nul...).
    """

    def __init__(self):
        self.count = 0

    def generate(self) -> str:
        result = format(self.count, 'x')
        self.count += 1
        return result


def collect_image_paths(entries: Iterable[DictionaryEntry]) -> List[str]:
    """Get the unique image paths referenced by entries, in first-seen order."""
    paths: Dict[str, None] = {}
    for entry in entries:
        for definition in entry.definitions:
            for image in iter_images(definition):
                paths.setdefault(image.path, None)
    return list(paths)


def output_name(path: str, generator: FilenameGenerator) -> str:
    """Get the generated file name of an image, keeping supported extensions."""
    suffix = Path(path).suffix.lower()
    if suffix in SUPPORTED_EXTENSIONS:
        return generator.generate() + suffix
    return generator.generate() + '.jpg'


def open_image(source: Path) -> PILImage.Image:
    """Open an image with Pillow, rasterizing SVG sources with cairosvg first."""
    if source.suffix.lower() == '.svg':
        png = cairosvg.svg2png(bytestring=source.read_bytes())
        return PILImage.open(io.BytesIO(png))
    return PILImage.open(source)


def flatten(image: PILImage.Image) -> PILImage.Image:
    """Paste an image onto a white background, dropping its transparency."""
    if image.mode in ('RGBA', 'LA') or (image.mode == 'P' and 'transparency' in image.info):
        image = image.convert('RGBA')
        background = PILImage.new('RGB', image.size, 'white')
        background.paste(image, mask=image.getchannel('A'))
        return background
    if image.mode != 'RGB':
        return image.convert('RGB')
    return image


def convert_image(source: Path, target: Path, quality: int = DEFAULT_IMAGE_QUALITY):
    """
    Convert one image.

    Transparency is flattened onto white for every output format. JPEG
    output is re-encoded at `quality`. SVG sources are rasterized first;
    other files Pillow cannot identify are copied unchanged.
    """
    target.parent.mkdir(parents=True, exist_ok=True)
    image_format = SUPPORTED_EXTENSIONS.get(target.suffix.lower(), 'JPEG')

    try:
        with open_image(source) as image:
            image = flatten(image)
            if image_format == 'JPEG':
                image.save(target, image_format, quality=quality, optimize=True)
            else:
                image.save(target, image_format)
    except UnidentifiedImageError:
        logger.warning(f"Cannot decode {source}, copying it unchanged")
        shutil.copyfile(source, target)


def convert_images(
    input_dir: Path,
    output_dir: Path,
    paths: List[str],
    quality: int = DEFAULT_IMAGE_QUALITY,
    batch_size: int = IMAGE_BATCH_SIZE,
) -> Dict[str, str]:
    """
    Convert images in bounded batches.

    Args:
        input_dir: Dictionary directory the paths are relative to
        output_dir: Output directory; images go to its `i/` subdirectory
        paths: Image paths as referenced by the definitions
        quality: JPEG quality
        batch_size: Images converted concurrently

    Returns:
        Map of original path -> path relative to the output directory

    Raises:
        FileNotFoundError: If a referenced image is missing
    """
    generator = FilenameGenerator()
    path_map: Dict[str, str] = {}
    jobs: List[Tuple[str, Path, Path]] = []

    for path in paths:
        relative = f"{IMAGE_OUTPUT_DIR}/{output_name(path, generator)}"
        jobs.append((path, Path(input_dir) / path, Path(output_dir) / relative))
        path_map[path] = relative

    batches = [jobs[i:i + batch_size] for i in range(0, len(jobs), batch_size)]
    with ThreadPoolExecutor(max_workers=batch_size) as executor:
        for i, batch in enumerate(batches):
            futures = [executor.submit(convert_image, source, target, quality)
                       for _, source, target in batch]
            for future in futures:
                future.result()
            logger.info(f"Progress (Image): {i + 1}/{len(batches)} ({(i + 1) / len(batches) * 100:.2f}%)")

    return path_map


def copy_cover_image(cover: Path, output_dir: Path) -> str:
    """Copy the cover image to the output as `cover.<ext>` and return its name."""
    cover = Path(cover)
    if not cover.exists():
        raise FileNotFoundError(f"Cover image not found: {cover}")
    name = 'cover' + cover.suffix
    output_dir.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(cover, output_dir / name)
    return name
