from __future__ import annotations

from typing import Optional

import numpy as np

from ...config import BuilderConfig
from ...types import Builder
from .base import MazeBuilder
from .dfs import DFSBuilder
from .eller import EllerBuilder
from .prim import PrimBuilder

_BUILDERS = {
    Builder.DFS: DFSBuilder,
    Builder.PRIM: PrimBuilder,
    Builder.ELLER: EllerBuilder,
}


def make_builder(
    builder: Builder | str,
    rng: Optional[np.random.Generator] = None,
    cfg: Optional[BuilderConfig] = None,
) -> MazeBuilder:
    """Instantiate the generation strategy for `builder`."""
    return _BUILDERS[Builder.parse(builder)](rng, cfg)


__all__ = [
    "MazeBuilder",
    "DFSBuilder",
    "PrimBuilder",
    "EllerBuilder",
    "make_builder",
]
