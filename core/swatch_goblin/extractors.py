from __future__ import annotations

from collections import Counter
import io
import logging
import random

from colorthief import ColorThief


LOG = logging.getLogger(__name__)

MAX_CLUSTER_SAMPLES = 4000
MAX_KMEANS_ROUNDS = 12
DEFAULT_SEED = 1337
COLORTHIEF_QUALITY = 10


def image_pixels(image) -> list[tuple[int, int, int]]:
    raw = image.convert('RGB').tobytes()
    return list(zip(raw[0::3], raw[1::3], raw[2::3]))


def _distance_sq(c1, c2):
    return (c1[0] - c2[0]) ** 2 + (c1[1] - c2[1]) ** 2 + (c1[2] - c2[2]) ** 2


def _nearest(px, centroids):
    best_idx = 0
    best = None
    for idx, center in enumerate(centroids):
        dist = _distance_sq(px, center)
        if best is None or dist < best:
            best = dist
            best_idx = idx
    return best_idx


class KMeansExtractor:
    """Dominant colors by k-means over a pixel sample, ranked by cluster size."""

    name = 'kmeans'

    def __init__(self, sample_limit=MAX_CLUSTER_SAMPLES, seed=DEFAULT_SEED):
        self.sample_limit = sample_limit
        self.seed = seed

    def extract(self, image, count):
        rng = random.Random(self.seed)
        pixels = image_pixels(image)
        if len(pixels) > self.sample_limit:
            pixels = rng.sample(pixels, self.sample_limit)
        if not pixels:
            return []

        freq = Counter(pixels)
        if len(freq) <= count:
            return [c for c, _ in freq.most_common(count)]

        distinct = sorted(freq)
        centroids = rng.sample(distinct, count)

        for _ in range(MAX_KMEANS_ROUNDS):
            sums = [[0, 0, 0, 0] for _ in centroids]
            for px, weight in freq.items():
                bucket = sums[_nearest(px, centroids)]
                bucket[0] += px[0] * weight
                bucket[1] += px[1] * weight
                bucket[2] += px[2] * weight
                bucket[3] += weight

            new_centroids = []
            for i, (r, g, b, n) in enumerate(sums):
                if not n:
                    new_centroids.append(centroids[i])
                    continue
                new_centroids.append((int(r / n), int(g / n), int(b / n)))

            if new_centroids == centroids:
                break
            centroids = new_centroids

        frequency_map = {}
        for px, weight in freq.items():
            center = centroids[_nearest(px, centroids)]
            frequency_map[center] = frequency_map.get(center, 0) + weight

        ranked = sorted(frequency_map.items(), key=lambda item: item[1], reverse=True)
        return [c for c, _ in ranked[:count]]


class ColorThiefExtractor:
    """Median-cut (MMCQ) palette through the colorthief package."""

    name = 'colorthief'

    def __init__(self, quality=COLORTHIEF_QUALITY):
        self.quality = quality

    def extract(self, image, count):
        buf = io.BytesIO()
        image.convert('RGB').save(buf, format='PNG')
        buf.seek(0)
        thief = ColorThief(buf)
        palette = thief.get_palette(color_count=max(2, int(count)), quality=self.quality)
        # MMCQ box averages can land on 256.
        return [tuple(min(255, max(0, int(v))) for v in c[:3]) for c in palette[:count]]


EXTRACTORS = {
    KMeansExtractor.name: KMeansExtractor,
    ColorThiefExtractor.name: ColorThiefExtractor,
}


def get_extractor(name=None):
    key = (name or KMeansExtractor.name).strip().lower()
    if key not in EXTRACTORS:
        raise ValueError(f'Unknown extractor: {name!r}. Use one of {sorted(EXTRACTORS)}.')
    LOG.debug('using palette extractor %s', key)
    return EXTRACTORS[key]()
