"""Command-line client for the ID photo endpoint.

Usage:
    python -m idphoto.cli samples/me.jpg --background blue --outfit male-suit --output id.png
"""

import argparse
import asyncio
import base64
import mimetypes
import sys
from pathlib import Path

from idphoto.client import DEFAULT_BASE_URL, IdPhotoError, generate_id_photo
from idphoto.config import configure_logging


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Turn a snapshot into an ID photo.")
    parser.add_argument("photo", type=Path, help="Path to the source photo.")
    parser.add_argument("--background", default="white", help="blue, white or gray.")
    parser.add_argument("--outfit", default="other", help="male-suit, female-suit or other.")
    parser.add_argument(
        "--no-beautify",
        dest="beautify",
        action="store_false",
        help="Disable all cosmetic adjustments.",
    )
    parser.add_argument("--url", default=DEFAULT_BASE_URL, help="Base URL of the ID photo server.")
    parser.add_argument("--output", type=Path, default=Path("id_photo.png"))
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    configure_logging()
    args = parse_args(argv)

    photo = args.photo.expanduser().resolve()
    if not photo.exists():
        print(f"File does not exist: {photo}", file=sys.stderr)
        return 1
    mime_type = mimetypes.guess_type(photo.name)[0] or "image/png"

    try:
        image = asyncio.run(
            generate_id_photo(
                base64.b64encode(photo.read_bytes()).decode("utf-8"),
                mime_type,
                args.background,
                args.outfit,
                args.beautify,
                base_url=args.url,
            )
        )
    except IdPhotoError as e:
        print(f"Request failed: {e}", file=sys.stderr)
        return 1

    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_bytes(base64.b64decode(image))
    print(f"Saved ID photo to {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
