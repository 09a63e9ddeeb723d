#!/usr/bin/env python3
"""
Derive an accessible color palette from an image or a list of colors.

Seeds come either from the dominant colors of an image or straight from the
command line. The report covers the extended palette, text/background
contrast pairs, harmony suggestions and two neutrals.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from color_model import InvalidColorError, EmptySeedSetError
from palette import MIN_LEGIBLE_CONTRAST, PaletteResult, TIER_AA, TIER_AA_LARGE, derive_palette
from seed_colors import DEFAULT_SEED_COUNT, extract_seed_colors


# =============================================================================
# Render
# =============================================================================

def render(result: PaletteResult) -> str:
    """Render a palette result as a prose report."""
    lines = []

    lines.append(f"SEEDS: {', '.join(result.seeds)}")
    lines.append(f"Palette colors: {len(result.palette)} | Contrast pairs: {len(result.contrast_pairs)}")
    lines.append("")

    lines.append("PALETTE:")
    lines.append("")
    for color in result.palette:
        lines.append(f"  {color.hex}  {color.name:<22} "
                     f"on white {color.contrast_with_white:.2f}:1 | on black {color.contrast_with_black:.2f}:1")
    lines.append("")

    accessible = [p for p in result.contrast_pairs if p.tier == TIER_AA]
    large_only = [p for p in result.contrast_pairs if p.tier == TIER_AA_LARGE]
    lines.append("CONTRAST PAIRS:")
    lines.append(f"  {len(accessible)} pass AA, {len(large_only)} pass AA for large text only, "
                 f"{len(result.contrast_pairs) - len(accessible) - len(large_only)} fail")
    for pair in sorted(accessible, key=lambda p: -p.contrast)[:10]:
        lines.append(f"  - {pair.text.name} ({pair.text.hex}) on {pair.background.name} ({pair.background.hex}): "
                     f"{pair.contrast:.2f}:1 ({pair.tier})")
    lines.append("")

    lines.append("SUGGESTED ADD-ONS:")
    for suggestion in result.suggestions:
        lines.append(f"  {suggestion.base} → {suggestion.suggested}  {suggestion.name:<22} "
                     f"on white {suggestion.contrast_with_white:.2f}:1 | on black {suggestion.contrast_with_black:.2f}:1")
    lines.append("")

    lines.append("NEUTRALS:")
    for neutral in result.neutrals:
        lines.append(f"  [{neutral.label}] {neutral.name} {neutral.hex}")
        ratios = ', '.join(f"{c.color} {c.ratio:.2f}:1" for c in neutral.contrast)
        lines.append(f"    vs seeds: {ratios}")

    return "\n".join(lines)


# =============================================================================
# CLI
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Derive an accessible color palette from an image or seed colors.'
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        '--input', '-i',
        help='Path to an image to take seed colors from'
    )
    source.add_argument(
        '--colors', '-c',
        nargs='+',
        metavar='HEX',
        help='Seed colors as hex strings'
    )
    parser.add_argument(
        '--count', '-n',
        type=int,
        default=DEFAULT_SEED_COUNT,
        help=f'Number of seed colors to take from the image (default {DEFAULT_SEED_COUNT})'
    )
    parser.add_argument(
        '--min-contrast',
        type=float,
        default=MIN_LEGIBLE_CONTRAST,
        help=f'Contrast a suggestion needs against white or black before it is darkened '
             f'(default {MIN_LEGIBLE_CONTRAST})'
    )
    parser.add_argument(
        '--json',
        action='store_true',
        help='Print the result as JSON instead of prose'
    )
    parser.add_argument(
        '--output', '-o',
        nargs='?',
        const=True,
        default=None,
        help='Write a JSON report. Optionally specify path, otherwise auto-names from input.'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable debug logging'
    )
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(levelname)s %(name)s: %(message)s')

    try:
        if args.input:
            seeds = extract_seed_colors(args.input, count=args.count)
        else:
            seeds = args.colors
        result = derive_palette(seeds, min_contrast=args.min_contrast)
    except (FileNotFoundError, InvalidColorError, EmptySeedSetError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error analyzing image: {e}", file=sys.stderr)
        return 1

    report = json.dumps(result.to_dict(), indent=2)

    if args.json:
        print(report)
    else:
        print(render(result))

    if args.output:
        if args.output is True:
            stem = Path(args.input).stem if args.input else 'seeds'
            base = Path(args.input).parent if args.input else Path('.')
            output_path = base / f"{stem}-palette.json"
        else:
            output_path = Path(args.output)

        try:
            output_path.write_text(report)
            print(f"\nWrote: {output_path}")
        except OSError as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
