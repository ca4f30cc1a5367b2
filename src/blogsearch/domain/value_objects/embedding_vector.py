"""Fixed-dimension unit embedding vector."""

import math
from collections.abc import Sequence
from dataclasses import dataclass

from blogsearch.domain.exceptions import DimensionMismatch, EmbeddingFailure


@dataclass(frozen=True)
class EmbeddingVector:
    """Unit-length vector with exactly ``dimensions`` components."""

    values: tuple[float, ...]
    dimensions: int

    def __post_init__(self) -> None:
        if len(self.values) != self.dimensions:
            raise DimensionMismatch(self.dimensions, len(self.values))

    @classmethod
    def normalized(cls, raw: Sequence[float], dimensions: int) -> "EmbeddingVector":
        """Build from raw model output, scaling it to unit length."""
        if len(raw) != dimensions:
            raise DimensionMismatch(dimensions, len(raw))
        values = [float(v) for v in raw]
        norm = math.sqrt(math.fsum(v * v for v in values))
        if not math.isfinite(norm) or norm == 0.0:
            raise EmbeddingFailure(f"Cannot normalize embedding with norm {norm}")
        return cls(values=tuple(v / norm for v in values), dimensions=dimensions)

    def to_list(self) -> list[float]:
        return list(self.values)
