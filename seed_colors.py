#!/usr/bin/env python3
"""
Extract dominant seed colors from an image.

Pixels are quantized into JND-sized LAB bins, then greedily merged into
clusters weighted by pixel count. The largest clusters become the seeds.
"""

import numpy as np
from PIL import Image

from color_model import lab_to_hex, rgb_to_lab


JND = 2.3  # Just Noticeable Difference in LAB units

# Image size limits (security: prevent decompression bombs)
MAX_IMAGE_PIXELS = 50_000_000  # 50 megapixels
MAX_IMAGE_DIMENSION = 10_000  # 10k pixels per side

DOWNSCALE_SIZE = 256
DEFAULT_SEED_COUNT = 5


def load_image_rgb(image_path: str, downscale: bool = True) -> np.ndarray:
    """
    Load an image as an (n, 3) array of RGB pixels.

    Raises:
        FileNotFoundError: If image file doesn't exist
        ValueError: If file is not a valid image or exceeds size limits
    """
    try:
        img = Image.open(image_path)
    except FileNotFoundError:
        raise FileNotFoundError(f"Image not found: {image_path}")
    except Exception as e:
        raise ValueError(f"Could not open image: {e}")

    with img:
        width, height = img.size
        if width > MAX_IMAGE_DIMENSION or height > MAX_IMAGE_DIMENSION:
            raise ValueError(
                f"Image dimensions {width}x{height} exceed maximum "
                f"{MAX_IMAGE_DIMENSION}x{MAX_IMAGE_DIMENSION}"
            )
        if width * height > MAX_IMAGE_PIXELS:
            raise ValueError(
                f"Image has {width * height:,} pixels, exceeding maximum {MAX_IMAGE_PIXELS:,}"
            )

        rgb = img.convert('RGB')

    if downscale:
        rgb.thumbnail((DOWNSCALE_SIZE, DOWNSCALE_SIZE))

    return np.array(rgb).reshape(-1, 3)


def quantize_colors(pixels: np.ndarray, jnd_threshold: float = 1.0) -> np.ndarray:
    """
    Quantize RGB pixels into perceptually distinct colors.

    Args:
        pixels: Array of shape (n, 3) with RGB values 0-255
        jnd_threshold: Number of JNDs for bin size (1.0 = 2.3 LAB units)

    Returns:
        numpy array of shape (n_colors, 4) where columns are [L, a, b, pixels]
        Sorted by pixel count descending.
    """
    pixels_lab = rgb_to_lab(pixels)

    bin_size = jnd_threshold * JND
    binned = np.round(pixels_lab / bin_size).astype(np.int32)

    unique_bins, counts = np.unique(binned, axis=0, return_counts=True)
    centers = unique_bins.astype(np.float64) * bin_size

    results = np.column_stack([centers, counts.astype(np.float64)])

    # Sort by pixel count descending, ties in bin order
    return results[np.argsort(-results[:, 3], kind='stable')]


def group_colors(colors: np.ndarray, distance_threshold: float = 15.0, min_coverage: float = 0.01) -> np.ndarray:
    """
    Group similar colors into clusters by LAB distance, weighted by pixel count.

    Args:
        colors: Array of shape (n, 4) with columns [L, a, b, pixels]
        distance_threshold: Max LAB distance to merge a color into a cluster
        min_coverage: Minimum percentage of total pixels for a cluster (0.01 = 0.01%)

    Returns:
        Array of shape (n_clusters, 4) with columns [L, a, b, pixels]
        Sorted by pixel count descending.
    """
    if len(colors) == 0:
        return np.empty((0, 4))

    colors = colors[np.argsort(-colors[:, 3], kind='stable')]
    total_pixels = colors[:, 3].sum()

    clusters = []

    for color in colors:
        lab = color[:3]
        pixels = color[3]

        merged = False
        for cluster in clusters:
            cluster_lab = cluster[:3] / cluster[3]  # Weighted center
            if np.linalg.norm(lab - cluster_lab) < distance_threshold:
                cluster[:3] += lab * pixels
                cluster[3] += pixels
                merged = True
                break

        if not merged:
            # New cluster: store weighted LAB sum and pixel count
            clusters.append(np.array([*(lab * pixels), pixels]))

    results = np.array(clusters)
    results[:, :3] /= results[:, 3:4]

    # Filter out noise (clusters below minimum coverage threshold)
    min_pixels = total_pixels * (min_coverage / 100)
    results = results[results[:, 3] >= min_pixels]

    return results[np.argsort(-results[:, 3], kind='stable')]


def extract_seed_colors(image_path: str, count: int = DEFAULT_SEED_COUNT, downscale: bool = True) -> list[str]:
    """
    Extract up to `count` dominant colors from an image, most dominant first.

    Returns:
        List of lowercase hex strings.
    """
    if count < 1:
        raise ValueError(f"Seed count must be at least 1, got {count}")

    pixels = load_image_rgb(image_path, downscale=downscale)
    colors = quantize_colors(pixels)
    clusters = group_colors(colors)

    seeds = []
    for cluster in clusters:
        hex_val = lab_to_hex(cluster[:3])
        if hex_val not in seeds:
            seeds.append(hex_val)
        if len(seeds) == count:
            break
    return seeds


if __name__ == '__main__':
    import sys

    if len(sys.argv) < 2:
        print("Usage: seed_colors.py IMAGE [COUNT]", file=sys.stderr)
        sys.exit(2)

    n = int(sys.argv[2]) if len(sys.argv) > 2 else DEFAULT_SEED_COUNT
    try:
        for seed in extract_seed_colors(sys.argv[1], count=n):
            print(seed)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
