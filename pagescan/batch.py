"""
Batch scan a folder of page photos.

Usage:
    pagescan INPUT_DIR OUTPUT_DIR [--mode auto|binarize|color]
                                  [--profile draft|standard|high] [--pdf NAME]

Every JPG/PNG in INPUT_DIR is scanned to an upright A4 page. Pages are saved
as page_0001.png, page_0002.png, ... or collected into one PDF.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional, Sequence

import cv2
import numpy as np
from PIL import Image

from pagescan import __version__, settings
from pagescan.errors import ScanError
from pagescan.models import EnhancementMode, OutputSizeProfile
from pagescan.pipeline import process_page

logger = logging.getLogger(__name__)


def load_images(input_dir: Path) -> List[Path]:
    """Load image paths from the input directory."""
    if not input_dir.exists():
        logger.error("Input directory does not exist: %s", input_dir)
        return []

    image_paths = sorted(
        path
        for path in input_dir.iterdir()
        if path.suffix.lower() in settings.IMAGE_SUFFIXES
    )
    logger.info("Found %d image(s) in %s", len(image_paths), input_dir)
    return image_paths


def read_image(path: Path) -> np.ndarray:
    """Read an image file as an RGB array."""
    with Image.open(path) as image:
        return np.array(image.convert("RGB"))


def save_page(image: np.ndarray, output_dir: Path, index: int) -> Path:
    """Save the processed page image with sequential naming."""
    output_dir.mkdir(parents=True, exist_ok=True)
    filename = output_dir / f"page_{index:04d}.png"

    conversion = cv2.COLOR_RGBA2BGRA if image.shape[2] == 4 else cv2.COLOR_RGB2BGR
    ok = cv2.imwrite(str(filename), cv2.cvtColor(image, conversion))
    if not ok:
        raise OSError(f"cv2.imwrite could not write {filename}")

    logger.info("Saved %s", filename)
    return filename


def save_pages_as_pdf(
    images: List[np.ndarray],
    output_dir: Path,
    filename: str,
    dpi: int = settings.PDF_RESOLUTION_DPI,
) -> Optional[Path]:
    """Save all processed pages in order as one PDF file."""
    if not images:
        logger.warning("No processed pages available for PDF export.")
        return None

    output_dir.mkdir(parents=True, exist_ok=True)
    pdf_path = output_dir / filename

    pil_pages = [Image.fromarray(image).convert("RGB") for image in images]
    pil_pages[0].save(
        pdf_path,
        save_all=True,
        append_images=pil_pages[1:],
        resolution=float(max(72, dpi)),
    )
    logger.info("Saved %s", pdf_path)
    return pdf_path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pagescan",
        description="Scan photographed pages into upright, enhanced A4 images",
    )
    parser.add_argument("input", type=Path, help="Folder with JPG/PNG page photos")
    parser.add_argument("output", type=Path, help="Folder for the scanned pages")
    parser.add_argument(
        "--mode",
        choices=[m.value for m in EnhancementMode],
        default=EnhancementMode.AUTO.value,
        help="Enhancement mode (default: auto)",
    )
    parser.add_argument(
        "--profile",
        choices=[p.value for p in OutputSizeProfile],
        default=OutputSizeProfile.STANDARD.value,
        help="Output resolution tier (default: standard)",
    )
    parser.add_argument("--pdf", metavar="FILENAME", help="Write one PDF instead of PNG pages")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log stage decisions")
    parser.add_argument("--version", action="version", version=f"pagescan {__version__}")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point for batch processing."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )

    image_paths = load_images(args.input)
    if not image_paths:
        logger.error("No images to process.")
        return 1

    page_index = 1
    processed_pages: List[np.ndarray] = []
    for image_path in image_paths:
        logger.info("Processing %s", image_path)
        try:
            image = read_image(image_path)
            processed = process_page(image, args.mode, args.profile)
            if args.pdf:
                processed_pages.append(processed)
            else:
                save_page(processed, args.output, page_index)
            page_index += 1
        except (OSError, ScanError, cv2.error) as exc:
            logger.exception("Error processing %s: %s", image_path, exc)

    if args.pdf:
        save_pages_as_pdf(processed_pages, args.output, args.pdf)

    return 0 if page_index > 1 else 1


if __name__ == "__main__":
    raise SystemExit(main())
