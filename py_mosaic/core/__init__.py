"""
Core board engine: partitioning, perturbation, region state, hit testing
and rendering.
"""

from .geometry import Point, Rect, polygon_area, polygon_center, point_in_polygon
from .partitioner import partition, partition_leaves
from .perturber import perturb, perturb_all
from .palette import Palette, DEFAULT_PALETTE
from .regions import Region, RegionStore, RevealOutcome, RevealResult
from .hit_test import hit_test, MISS
from .taps import TapDispatcher, TapEvent, TapKind
from .renderer import DrawingSurface, Renderer, RendererOptions

__all__ = ['Point', 'Rect', 'polygon_area', 'polygon_center', 'point_in_polygon',
           'partition', 'partition_leaves', 'perturb', 'perturb_all',
           'Palette', 'DEFAULT_PALETTE', 'Region', 'RegionStore', 'RevealOutcome',
           'RevealResult', 'hit_test', 'MISS', 'TapDispatcher', 'TapEvent', 'TapKind',
           'DrawingSurface', 'Renderer', 'RendererOptions']
