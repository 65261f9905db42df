"""Spatial index of level features.

The Schema stores every feature generated for one level together with the
derived markers each primary feature implies. It answers point and region
queries through a sparse grid of fixed-size chunks: a feature is listed in
every chunk its bounds overlap, so a query only inspects nearby features.

A Schema is write-once. Brushes add to it while a level is generated; the
generator then freezes it and it is read-only from then on.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from functools import reduce
from typing import Iterator, TypeVar

from brushwork.core.interval import Box2
from brushwork.core.types import Place
from .feature import BaseFeature

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 32

F = TypeVar("F", bound=BaseFeature)


class Schema:
    """Feature index with point containment and region intersection queries.

    Queries return features in insertion order.
    """

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE):
        """Initialize an empty schema.

        Args:
            chunk_size: Edge length of the index chunks, in cells
        """
        assert chunk_size > 0
        self._chunk_size = chunk_size
        self._features: list[BaseFeature] = []
        self._bounds: list[Box2] = []
        self._chunks: dict[tuple[int, int], list[int]] = defaultdict(list)
        self._frozen = False

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def add(self, feature: BaseFeature) -> None:
        """Insert a feature and its derived markers."""
        assert not self._frozen, "schema is frozen"
        self._insert(feature)
        for marker in feature.derived():
            self._insert(marker)

    def freeze(self) -> None:
        """Forbid further insertions."""
        self._frozen = True
        logger.debug(f"Schema frozen | features={len(self._features)} | chunks={len(self._chunks)}")

    @property
    def frozen(self) -> bool:
        return self._frozen

    def _insert(self, feature: BaseFeature) -> None:
        idx = len(self._features)
        box = feature.bounds()
        self._features.append(feature)
        self._bounds.append(box)
        # Empty features are kept for bounds() but never match a query
        if box.is_empty:
            return
        for key in self._chunk_keys(box):
            self._chunks[key].append(idx)

    def _chunk_keys(self, box: Box2) -> Iterator[tuple[int, int]]:
        size = self._chunk_size
        for cx in range(box.x.lo // size, (box.x.hi - 1) // size + 1):
            for cy in range(box.y.lo // size, (box.y.hi - 1) // size + 1):
                yield (cx, cy)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def intersecting(self, box: Box2) -> list[BaseFeature]:
        """All features whose bounds overlap box."""
        if box.is_empty:
            return []
        ids: set[int] = set()
        for key in self._chunk_keys(box):
            ids.update(self._chunks.get(key, ()))
        return [self._features[i] for i in sorted(ids) if self._bounds[i].intersects(box)]

    def at_point(self, place: Place) -> list[BaseFeature]:
        """All features containing place."""
        key = (place.x // self._chunk_size, place.y // self._chunk_size)
        return [
            self._features[i]
            for i in self._chunks.get(key, ())
            if self._bounds[i].contains(place)
        ]

    def of_kind(self, box: Box2, *kinds: type[F]) -> list[F]:
        """Features of the given classes overlapping box."""
        return [f for f in self.intersecting(box) if isinstance(f, kinds)]

    def bounds(self) -> Box2:
        """Covering box of every stored feature.

        Only meaningful once something has been added; an empty schema
        is a pipeline defect.
        """
        assert self._features, "bounds() on an empty schema"
        return reduce(Box2.union_cover, self._bounds)

    def __len__(self) -> int:
        return len(self._features)

    def __iter__(self) -> Iterator[BaseFeature]:
        return iter(self._features)
