"""
CLI interface for yomichan-kindle.

Usage:
    yomichan-kindle -i jitendex/ -o out/ -t Jitendex
    yomichan-kindle -i daijirin/ -o out/ -t 大辞林 -m jitendex/ -c cover.jpg
    yomichan-kindle -i jitendex/ -o out/ -t Jitendex --lookup 書かなかった
"""

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import List, Optional

from yomichan_kindle import __version__, convert
from yomichan_kindle.assets import collect_image_paths, convert_images, copy_cover_image
from yomichan_kindle.constants import DEFAULT_IMAGE_QUALITY, HEADWORD_SEPARATOR, LOOKUP_INDEX_FILENAME
from yomichan_kindle.entry import KindleEntry
from yomichan_kindle.index import build_lookup_index, longest_match, save_lookup_index
from yomichan_kindle.reference import merge_reference_data
from yomichan_kindle.writer import write_dictionary
from yomichan_kindle.yomichan import load_term_banks

logger = logging.getLogger(__name__)


# ============================================================================
# Output Formatting
# ============================================================================

def format_lookup(word: str, index, entries: List[KindleEntry]) -> str:
    """
    Describe where Kindle would land for a looked-up word.

    Format: word -> matched form: headword1、headword2 | ...
    """
    match = longest_match(index, word)
    if match is None:
        return f"{word}: no match"

    form, positions = match
    labels = [HEADWORD_SEPARATOR.join(entries[p].headwords) for p in positions]
    return f"{word} -> {form}: {' | '.join(labels)}"


# ============================================================================
# Build
# ============================================================================

def build(args: argparse.Namespace) -> Path:
    """Run the whole conversion and return the OPF path."""
    start_time = time.time()
    output_dir = Path(args.output)
    output_dir.mkdir(parents=True, exist_ok=True)

    entries = load_term_banks(Path(args.input), strict=not args.lenient)
    logger.info("Loaded dictionary")

    if args.main_dict:
        reference = load_term_banks(Path(args.main_dict), strict=not args.lenient)
        entries = merge_reference_data(entries, reference)

    cover_image = None
    if args.cover_image:
        logger.info("Copying cover image")
        cover_image = copy_cover_image(Path(args.cover_image), output_dir)

    logger.info(f"Copying/converting images (Quality: {args.image_quality})")
    image_paths = collect_image_paths(entries)
    path_map = convert_images(Path(args.input), output_dir, image_paths, args.image_quality)

    kindle_entries = convert(entries, path_map)
    logger.info(f"Assembled {len(kindle_entries)} entries from {len(entries)} rows")

    opf_path = write_dictionary(
        kindle_entries,
        output_dir,
        args.title,
        author=args.author,
        cover_image=cover_image,
        resources=path_map.values(),
        pretty=args.debug,
    )

    if args.index or args.lookup:
        index = build_lookup_index(kindle_entries)
        if args.index:
            save_lookup_index(index, output_dir / LOOKUP_INDEX_FILENAME)
        for word in args.lookup:
            print(format_lookup(word, index, kindle_entries))

    elapsed = time.time() - start_time
    logger.info(f"Build completed in {elapsed:.1f} seconds")

    return opf_path


# ============================================================================
# Main
# ============================================================================

def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(
        prog="yomichan-kindle",
        description="Convert a Yomichan dictionary into Kindle dictionary sources",
    )
    parser.add_argument('-i', '--input', help="Input dictionary directory (unpacked Yomichan zip)")
    parser.add_argument('-o', '--output', help="Output directory")
    parser.add_argument('-t', '--title', help="Title of the dictionary")
    parser.add_argument('-a', '--author', help="Author")
    parser.add_argument('-c', '--cover-image', help="Image for the cover")
    parser.add_argument(
        '-m', '--main-dict',
        help="Main dictionary to use as reference (for alternate writings and frequency)",
    )
    parser.add_argument(
        '--image-quality',
        type=int,
        default=DEFAULT_IMAGE_QUALITY,
        help=f"JPEG quality of converted images (default: {DEFAULT_IMAGE_QUALITY})",
    )
    parser.add_argument(
        '--lenient',
        action='store_true',
        help="Skip invalid term-bank rows instead of failing",
    )
    parser.add_argument('--debug', action='store_true', help="Write readable (pretty-printed) output")
    parser.add_argument(
        '--lookup',
        action='append',
        default=[],
        metavar='WORD',
        help="Show which entry Kindle would open for WORD (repeatable)",
    )
    parser.add_argument(
        '--index',
        action='store_true',
        help=f"Save the lookup index as {LOOKUP_INDEX_FILENAME}",
    )
    parser.add_argument(
        '--version', '-v',
        action='version',
        version=f"yomichan-kindle {__version__}",
    )

    args = parser.parse_args(argv)

    if not args.input or not args.output or not args.title:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
    )

    try:
        build(args)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
