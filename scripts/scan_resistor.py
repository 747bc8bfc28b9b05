#!/usr/bin/env python3
"""
Decode a resistor's value from a photograph of its color bands.

Thin wrapper around PipelineService for command-line use. Optionally writes
the highlighted scanline image and a full debug log.
"""

import argparse
import json
import logging
import os
import sys
from datetime import datetime
from pathlib import Path

from dotenv import load_dotenv

# Add project root to path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

load_dotenv()

from config.scan_config import LOG_LEVEL, RESISTOR_PALETTE
from services.color.palette import PALETTES, get_palette
from services.pipeline.pipeline import PipelineService
from services.utils.debug import DebugContext
from utils.image_loader import load_image
from utils.visual_logger import save_visualization

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Decode a resistor value from an image of its color bands')
    parser.add_argument('image_path', help='Path or URL of the resistor image')
    parser.add_argument('--palette', choices=sorted(PALETTES), default=RESISTOR_PALETTE,
                        help=f'Band color palette (default: {RESISTOR_PALETTE})')
    parser.add_argument('--visualize', metavar='PATH', help='Write the classified scanline image to PATH')
    parser.add_argument('--save-results', action='store_true', help='Save a step-by-step debug log')
    parser.add_argument('--output-dir', type=str, default='experiments', help='Output directory for debug logs')
    parser.add_argument('--json', action='store_true', help='Print the full result as JSON')
    return parser


def main(argv=None) -> int:
    """CLI entry point. Returns the process exit code."""
    args = build_parser().parse_args(argv)
    
    logging.basicConfig(level=LOG_LEVEL, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    
    try:
        image = load_image(args.image_path)
    except ValueError as e:
        logger.critical(f'Failed to load image: {e}')
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    
    debug = None
    image_stem = Path(args.image_path).stem or 'image'
    if args.save_results:
        # Timestamped run name to avoid overwriting previous results
        run_name = f"{image_stem}_{datetime.now().strftime('%Y%m%d_%H%M%S')}"
        debug = DebugContext(
            enabled=True,
            output_dir=args.output_dir,
            image_name=run_name,
            comparison_tag='pipeline'
        )
        debug.add_step('00_input', 'Input Image', image, {
            'width': image.shape[1],
            'height': image.shape[0]
        })
    
    pipeline = PipelineService(palette=get_palette(args.palette))
    result = pipeline.process_image(
        image=image,
        image_name=image_stem,
        debug=debug,
        visualize=bool(args.visualize)
    )
    visualization = result.pop('visualization', None)
    
    if visualization is not None:
        try:
            save_visualization(visualization, args.visualize)
        except (OSError, ValueError) as e:
            logger.error(f'Failed to save visualization: {e}')
            print(f"ERROR: {e}", file=sys.stderr)
            return 1
    
    if debug:
        log_path = debug.save_log()
        if log_path:
            print(f"Results saved to: {log_path}")
    
    if args.json:
        print(json.dumps(result, indent=2))
    elif result.get('success'):
        data = result['data']
        print(f"colors with background: {' '.join(data['bands_with_background'])}")
        print(f"colors: {' '.join(data['bands'])}")
        print(f"resistance: {data['resistance_ohms']} ohms ({data['resistance_display']})")
        print(f"tolerance: {data['tolerance_percent']}%")
    else:
        print(f"ERROR [{result.get('error_code', 'UNKNOWN')}]: {result.get('error', 'Unknown error')}",
              file=sys.stderr)
        if result.get('bands'):
            print(f"colors: {' '.join(result['bands'])}", file=sys.stderr)
    
    return 0 if result.get('success') else 1


if __name__ == '__main__':
    sys.exit(main())
