"""
Palette derivation engine.

Takes a handful of seed colors and derives four independent results:
1. Extended palette: light/dark/hue-shifted variants of every seed, deduplicated and named
2. Contrast pairs: every ordered text/background pair of the palette with its WCAG tier
3. Harmony suggestions: complementary and triadic companions for each seed
4. Neutrals: a light and a dark tone from the perceptual average of the seeds

All stages are pure functions of the seeds; derive_palette() joins them.
"""

import logging
from dataclasses import asdict, dataclass

from color_model import BLACK, WHITE, EmptySeedSetError, average, contrast, to_color
from color_names import name_color

logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

# WCAG thresholds
AA_CONTRAST = 4.5
AA_LARGE_CONTRAST = 3.0

TIER_AA = 'AA'
TIER_AA_LARGE = 'AA-Large'
TIER_FAIL = 'Fail'

# Hue rotations applied to each seed
VARIANT_HUE_SHIFT = 30
HARMONY_ROTATIONS = ('+180', '+60', '-60')  # complementary, triadic, triadic

# Suggestions illegible on both white and black are darkened by this amount
MIN_LEGIBLE_CONTRAST = AA_CONTRAST
LEGIBILITY_DARKEN = 2

# Neutral synthesis
NEUTRAL_SHIFT = 3
NEUTRAL_DESATURATE = 2
LIGHT_NEUTRAL_LABEL = 'Suggested Light Neutral'
DARK_NEUTRAL_LABEL = 'Suggested Dark Neutral'

RATIO_DECIMALS = 2


# =============================================================================
# Records
# =============================================================================

@dataclass(frozen=True)
class NamedColor:
    """A palette entry with its contrast against white and black."""
    hex: str
    name: str
    contrast_with_white: float
    contrast_with_black: float


@dataclass(frozen=True)
class ContrastPair:
    """Text color rendered on a background color."""
    text: NamedColor
    background: NamedColor
    contrast: float
    tier: str  # 'AA', 'AA-Large', 'Fail'


@dataclass(frozen=True)
class Suggestion:
    """A harmony companion for a seed color."""
    base: str
    suggested: str
    name: str
    contrast_with_white: float  # Measured on the candidate before any darkening
    contrast_with_black: float


@dataclass(frozen=True)
class NeutralContrast:
    color: str
    ratio: float


@dataclass(frozen=True)
class Neutral:
    """A low-saturation tone derived from the seed average."""
    hex: str
    label: str
    name: str
    contrast: tuple  # NeutralContrast per seed, in seed order


@dataclass(frozen=True)
class PaletteResult:
    """Everything derived from one set of seeds."""
    seeds: tuple  # Seed hex strings
    palette: tuple  # NamedColor
    contrast_pairs: tuple  # ContrastPair
    suggestions: tuple  # Suggestion
    neutrals: tuple  # Neutral (light, dark)

    def to_dict(self) -> dict:
        """JSON-serializable view of the result."""
        return asdict(self)


def _ratio(a, b) -> float:
    return round(contrast(a, b), RATIO_DECIMALS)


def classify_contrast(ratio: float) -> str:
    """Classify a contrast ratio into a WCAG accessibility tier."""
    if ratio >= AA_CONTRAST:
        return TIER_AA
    if ratio >= AA_LARGE_CONTRAST:
        return TIER_AA_LARGE
    return TIER_FAIL


def describe_color(color) -> NamedColor:
    """Attach a name and white/black contrast figures to a color."""
    color = to_color(color)
    return NamedColor(
        hex=color.hex,
        name=name_color(color),
        contrast_with_white=_ratio(color, WHITE),
        contrast_with_black=_ratio(color, BLACK),
    )


# =============================================================================
# Stage 1: Palette Expansion
# =============================================================================

def seed_variants(seed) -> list:
    """The five palette variants of one seed: lighter, itself, darker, hue +30, hue -30."""
    seed = to_color(seed)
    return [
        seed.brighten(1),
        seed,
        seed.darken(1),
        seed.adjust_hue(VARIANT_HUE_SHIFT),
        seed.adjust_hue(-VARIANT_HUE_SHIFT),
    ]


def expand_palette(seeds) -> tuple:
    """
    Expand seeds into a deduplicated, named palette.

    Variants are generated seed by seed; a hex that already appeared earlier
    (from the same or a previous seed) is dropped.

    Returns:
        Tuple of NamedColor in first-occurrence order, at most 5 per seed.
    """
    seen = set()
    palette = []
    for seed in seeds:
        for variant in seed_variants(seed):
            if variant.hex in seen:
                continue
            seen.add(variant.hex)
            palette.append(describe_color(variant))
    return tuple(palette)


# =============================================================================
# Stage 2: Contrast Matrix
# =============================================================================

def build_contrast_pairs(palette) -> tuple:
    """
    Rate every ordered (text, background) pair of distinct palette entries.

    Returns:
        Tuple of k * (k - 1) ContrastPair, text-major order.
    """
    pairs = []
    for i, text in enumerate(palette):
        for j, background in enumerate(palette):
            if i == j:
                continue
            ratio = contrast(text.hex, background.hex)
            pairs.append(ContrastPair(
                text=text,
                background=background,
                contrast=round(ratio, RATIO_DECIMALS),
                tier=classify_contrast(ratio),
            ))
    return tuple(pairs)


# =============================================================================
# Stage 3: Harmony Suggestions
# =============================================================================

def suggest_harmonies(seeds, min_contrast: float = MIN_LEGIBLE_CONTRAST) -> tuple:
    """
    Suggest complementary and triadic companions for each seed.

    A candidate that reaches min_contrast against neither white nor black is
    darkened before being returned. The reported contrast figures are those
    of the candidate before darkening; the name describes the returned hex.

    Note that with the default threshold of 4.5 no candidate is ever darkened:
    every color reaches at least sqrt(21) ~= 4.58 against white or black.

    Returns:
        Tuple of Suggestion, three per seed (complementary, +60, -60).
    """
    suggestions = []
    for seed in seeds:
        seed = to_color(seed)
        for rotation in HARMONY_ROTATIONS:
            candidate = seed.adjust_hue(rotation)
            with_white = contrast(candidate, WHITE)
            with_black = contrast(candidate, BLACK)

            suggested = candidate
            if with_white < min_contrast and with_black < min_contrast:
                suggested = candidate.darken(LEGIBILITY_DARKEN)
                logger.debug("Darkened %s suggestion %s -> %s", seed.hex, candidate.hex, suggested.hex)

            suggestions.append(Suggestion(
                base=seed.hex,
                suggested=suggested.hex,
                name=name_color(suggested),
                contrast_with_white=round(with_white, RATIO_DECIMALS),
                contrast_with_black=round(with_black, RATIO_DECIMALS),
            ))
    return tuple(suggestions)


# =============================================================================
# Stage 4: Neutrals
# =============================================================================

def _neutral(color, label: str, seeds: list) -> Neutral:
    return Neutral(
        hex=color.hex,
        label=label,
        name=name_color(color),
        contrast=tuple(NeutralContrast(color=s.hex, ratio=_ratio(color, s)) for s in seeds),
    )


def synthesize_neutrals(seeds) -> tuple:
    """
    Derive a light and a dark neutral from the LAB average of the seeds.

    The average is rounded to an 8-bit color before it is brightened or
    darkened, so results can sit one channel step away from shifting the
    unrounded LAB mean.

    Raises:
        EmptySeedSetError: If there are no seeds to average
    """
    seeds = [to_color(s) for s in seeds]
    if not seeds:
        raise EmptySeedSetError("Neutrals need at least one seed color")

    avg = average(seeds, 'lab')
    light = avg.brighten(NEUTRAL_SHIFT).desaturate(NEUTRAL_DESATURATE)
    dark = avg.darken(NEUTRAL_SHIFT).desaturate(NEUTRAL_DESATURATE)

    return (
        _neutral(light, LIGHT_NEUTRAL_LABEL, seeds),
        _neutral(dark, DARK_NEUTRAL_LABEL, seeds),
    )


# =============================================================================
# Main Pipeline
# =============================================================================

def derive_palette(seeds, min_contrast: float = MIN_LEGIBLE_CONTRAST) -> PaletteResult:
    """
    Run all derivation stages on a set of seed colors.

    Args:
        seeds: Hex strings, RGB triples or Colors
        min_contrast: Legibility threshold for harmony suggestions

    Raises:
        InvalidColorError: If any seed is not a valid color
        EmptySeedSetError: If seeds is empty
    """
    # Normalize everything up front so a bad seed fails before any stage runs
    colors = [to_color(s) for s in seeds]
    if not colors:
        raise EmptySeedSetError("At least one seed color is required")

    palette = expand_palette(colors)
    pairs = build_contrast_pairs(palette)
    suggestions = suggest_harmonies(colors, min_contrast=min_contrast)
    neutrals = synthesize_neutrals(colors)

    logger.debug(
        "Derived %d palette colors, %d contrast pairs, %d suggestions from %d seeds",
        len(palette), len(pairs), len(suggestions), len(colors),
    )

    return PaletteResult(
        seeds=tuple(c.hex for c in colors),
        palette=palette,
        contrast_pairs=pairs,
        suggestions=suggestions,
        neutrals=neutrals,
    )
