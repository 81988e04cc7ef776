#!/usr/bin/env python3
"""Shape preview tool for visual validation of styles.

Renders a style file with NumorphImageButton in each interaction state and
writes PNGs over a solid background, so shadow color, elevation and corner
settings can be checked by eye.

Usage:
    # Default style, 160x160
    python scripts/preview_shape.py --output_dir outputs/preview

    # Custom style, every shape type
    python scripts/preview_shape.py --style configs/styles/default.v1.yaml \
        --size 200,120 --all_shape_types --output_dir outputs/preview

Outputs:
    - <prefix>_<shape_type>_<state>.png: rendered widget
    - metadata.yaml: style path, size, render times
"""

import argparse
import logging
import sys
from pathlib import Path

import numpy as np

from numorph.component.image_button import NumorphImageButton
from numorph.graphics.bitmap import create_bitmap, to_rgba_u8
from numorph.graphics.canvas import Canvas
from numorph.shape import ShapeType
from numorph.utils import fs, logging_config, profiler, validators
from numorph.utils.color import parse_color

DEFAULT_STYLE = Path(__file__).resolve().parent.parent / "configs" / "styles" / "default.v1.yaml"

STATES = {
    'normal': False,
    'pressed': True,
}


def parse_args():
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a numorph style to PNG",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument(
        '--style',
        type=str,
        default=str(DEFAULT_STYLE),
        help='Path to a numorph_style.v1 YAML file'
    )
    parser.add_argument(
        '--size',
        type=str,
        default='160,160',
        help='Widget size in pixels (W,H), default: 160,160'
    )
    parser.add_argument(
        '--background',
        type=str,
        default='#FFECF0F3',
        help='Background color (#RRGGBB or #AARRGGBB), default: #FFECF0F3'
    )
    parser.add_argument(
        '--all_shape_types',
        action='store_true',
        help='Render flat, pressed and basin instead of the style shape type'
    )
    parser.add_argument(
        '--output_dir',
        type=str,
        default='outputs/preview_shape',
        help='Output directory, default: outputs/preview_shape'
    )
    parser.add_argument(
        '--prefix',
        type=str,
        default='shape',
        help='Output filename prefix, default: shape'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable debug logging'
    )
    return parser.parse_args()


def render_on_background(button: NumorphImageButton, background: int) -> np.ndarray:
    """Render the widget over an opaque background; returns (H, W, 4) uint8."""
    bitmap = create_bitmap(button.width, button.height)
    canvas = Canvas(bitmap)
    canvas.draw_color(background)
    canvas.draw_bitmap(button.render(), 0, 0)
    return to_rgba_u8(bitmap)


def main():
    """Main entry point."""
    args = parse_args()

    log_level = "DEBUG" if args.verbose else "INFO"
    logging_config.setup_logging(log_level=log_level, log_file=None)
    logging_config.install_excepthook()
    logger = logging.getLogger(__name__)

    width, height = map(int, args.size.split(','))
    background = parse_color(args.background)

    output_dir = Path(args.output_dir)
    fs.ensure_dir(output_dir)

    logger.info(f"Loading style: {args.style}")
    style = validators.load_style_config(args.style)

    if args.all_shape_types:
        shape_types = list(ShapeType)
    else:
        shape_types = [ShapeType.from_name(style.shape_type)]

    metadata = {
        'style': str(args.style),
        'size': [width, height],
        'background': args.background,
        'renders': [],
    }

    button = NumorphImageButton(style, width=width, height=height)
    for shape_type in shape_types:
        button.set_shape_type(shape_type)
        for state_name, pressed in STATES.items():
            button.set_pressed(pressed)

            name = f"{args.prefix}_{shape_type.name.lower()}_{state_name}.png"
            timings = {}
            with profiler.timer(name, sink=timings.__setitem__):
                image = render_on_background(button, background)
            elapsed = timings[name]

            fs.atomic_save_image(image, output_dir / name)
            logger.info(f"Saved {name} ({elapsed * 1000:.1f} ms)")
            metadata['renders'].append({
                'file': name,
                'shape_type': shape_type.name.lower(),
                'state': state_name,
                'render_ms': round(elapsed * 1000, 3),
            })

    fs.atomic_yaml_dump(metadata, output_dir / 'metadata.yaml')
    logger.info(f"Regenerations: {button.shape_drawable.regeneration_count}")
    logging_config.shutdown()
    return 0


if __name__ == '__main__':
    sys.exit(main())
