"""
Region store: the generated regions of one board and their lifecycle.

Each generation builds a fresh partition, perturbs it, and wraps every
polygon in an immutable ``Region``. The only state that changes afterwards
is per-region completion: ``completed`` (the task was marked done) and
``revealed`` (the cover was removed). Both only go from False to True, and
``revealed`` implies ``completed``.

Regions are tied to tasks by index. Regenerating the board bumps ``epoch``
so references taken against an older board can be detected and rejected.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import List, Optional, Sequence, Tuple

import structlog

from ..exceptions import InvalidRegionCountError
from ..models import Task
from ..utils.random import resolve_prng
from .alea_prng import AleaPRNG
from .geometry import Point, Rect, polygon_area, polygon_center, snap_rect
from .palette import DEFAULT_PALETTE, Palette
from .partitioner import partition
from .perturber import perturb_all

logger = structlog.get_logger()


@dataclass(frozen=True)
class Region:
    """One polygonal cell of the board."""

    id: int
    polygon: Tuple[Point, ...]
    area: float
    center: Point
    color: str
    completed: bool = False
    revealed: bool = False


class RevealOutcome(str, Enum):
    REVEALED = "revealed"
    ALREADY_REVEALED = "already_revealed"
    OUT_OF_RANGE = "out_of_range"
    STALE_EPOCH = "stale_epoch"


@dataclass(frozen=True)
class RevealResult:
    """Outcome of ``RegionStore.reveal``; ``changed`` is False for every no-op."""

    index: int
    outcome: RevealOutcome
    previously_revealed: bool = False

    @property
    def changed(self) -> bool:
        return self.outcome is RevealOutcome.REVEALED


@dataclass(frozen=True)
class RegionStats:
    region_count: int
    total_area: float
    avg_area: float
    revealed_count: int
    completed_count: int


class RegionStore:
    """Owns the regions of the current board."""

    def __init__(self, palette: Palette = DEFAULT_PALETTE,
                 disturbance_level: float = 0.12,
                 device_pixel_ratio: float = 1.0):
        """
        Args:
            palette: Cover colors, fixed for the lifetime of the store
            disturbance_level: Perturbation strength in [0, 1]
            device_pixel_ratio: Pixel ratio of the target surface
        """
        if not 0.0 <= disturbance_level <= 1.0:
            raise ValueError(f"disturbance_level must be within [0, 1], got {disturbance_level}")

        self.palette = palette
        self.disturbance_level = disturbance_level
        self.device_pixel_ratio = device_pixel_ratio
        self.bounds: Optional[Rect] = None
        self._regions: List[Region] = []
        self._epoch = 0

    @property
    def epoch(self) -> int:
        """Generation counter, bumped by every ``generate`` and ``clear``."""
        return self._epoch

    def __len__(self) -> int:
        return len(self._regions)

    def generate(self, rect: Rect, count: int, tasks: Optional[Sequence[Task]] = None,
                 prng: Optional[AleaPRNG] = None) -> Tuple[Region, ...]:
        """
        Build a new board, replacing any previous one.

        Args:
            rect: Area to partition
            count: Number of regions, at least 1
            tasks: Optional tasks bound by index; their difficulty picks the
                color and their ``completed`` flag is carried over
            prng: Random source, the process-wide generator by default

        Returns:
            The new regions

        Raises:
            InvalidRegionCountError: If ``count`` is below 1. The store is
                left unchanged.
        """
        if count < 1:
            raise InvalidRegionCountError(count)

        prng = resolve_prng(prng)
        bounds = snap_rect(rect)
        polygons = partition(bounds, count, prng)
        polygons = perturb_all(
            polygons, self.disturbance_level, bounds, prng, self.device_pixel_ratio
        )

        regions = []
        for index, polygon in enumerate(polygons):
            task = tasks[index] if tasks is not None and index < len(tasks) else None
            if task is not None:
                color = self.palette.color_for_difficulty(task.difficulty)
            else:
                color = self.palette.random_color(prng)

            regions.append(Region(
                id=index,
                polygon=tuple(polygon),
                area=polygon_area(polygon),
                center=polygon_center(polygon),
                color=color,
                completed=bool(task is not None and task.completed),
                revealed=False,
            ))

        self._regions = regions
        self.bounds = bounds
        self._epoch += 1

        logger.info("Regions generated", count=count, epoch=self._epoch,
                    total_area=round(sum(r.area for r in regions)))
        return tuple(regions)

    def clear(self) -> None:
        """Drop every region; references to the old board become stale."""
        self._regions = []
        self.bounds = None
        self._epoch += 1

    def all_regions(self) -> Tuple[Region, ...]:
        return tuple(self._regions)

    def region(self, index: int) -> Region:
        return self._regions[index]

    def _in_range(self, index: int) -> bool:
        return 0 <= index < len(self._regions)

    def reveal(self, index: int, epoch: Optional[int] = None) -> RevealResult:
        """
        Remove the cover of region ``index``; it also becomes completed.

        No-ops (already revealed, out of range, stale ``epoch``) are
        reported in the result instead of raising, so callers can skip
        reward accounting when nothing changed.
        """
        if epoch is not None and epoch != self._epoch:
            logger.warning("Reveal against stale board ignored", index=index,
                           epoch=epoch, current_epoch=self._epoch)
            return RevealResult(index, RevealOutcome.STALE_EPOCH)

        if not self._in_range(index):
            logger.warning("Reveal index out of range", index=index, regions=len(self._regions))
            return RevealResult(index, RevealOutcome.OUT_OF_RANGE)

        current = self._regions[index]
        if current.revealed:
            return RevealResult(index, RevealOutcome.ALREADY_REVEALED, previously_revealed=True)

        self._regions[index] = replace(current, completed=True, revealed=True)
        logger.info("Region revealed", index=index,
                    revealed=len(self.revealed_indices()), total=len(self._regions))
        return RevealResult(index, RevealOutcome.REVEALED, previously_revealed=False)

    def mark_completed(self, index: int) -> bool:
        """Flag the task of region ``index`` as completed without revealing it."""
        if not self._in_range(index):
            return False
        current = self._regions[index]
        if current.completed:
            return False
        self._regions[index] = replace(current, completed=True)
        return True

    def bind_tasks(self, tasks: Sequence[Task]) -> int:
        """
        Rebind the current regions to a replacement task list of the same length.

        Colors follow the new difficulties and a task already marked completed
        completes its region. Reveals are kept; the epoch does not change.

        Returns:
            Number of regions that changed
        """
        if len(tasks) != len(self._regions):
            raise ValueError(
                f"Expected {len(self._regions)} tasks to rebind, got {len(tasks)}"
            )

        changed = 0
        for index, (region, task) in enumerate(zip(self._regions, tasks)):
            color = self.palette.color_for_difficulty(task.difficulty)
            completed = region.completed or task.completed
            if color != region.color or completed != region.completed:
                self._regions[index] = replace(region, color=color, completed=completed)
                changed += 1

        logger.debug("Tasks rebound", regions=len(self._regions), changed=changed)
        return changed

    def restore(self, revealed_ids: Sequence[int]) -> int:
        """
        Replay recorded reveals onto a freshly generated board.

        Returns:
            Number of regions actually revealed
        """
        restored = 0
        for index in revealed_ids:
            if self.reveal(index).changed:
                restored += 1
        if restored != len(set(revealed_ids)):
            logger.warning("Some recorded reveals could not be replayed",
                           recorded=len(revealed_ids), restored=restored)
        return restored

    def revealed_indices(self) -> List[int]:
        return [r.id for r in self._regions if r.revealed]

    def is_fully_revealed(self) -> bool:
        """True when every region is revealed, and vacuously for an empty store."""
        return all(r.revealed for r in self._regions)

    def stats(self) -> RegionStats:
        total_area = sum(r.area for r in self._regions)
        count = len(self._regions)
        return RegionStats(
            region_count=count,
            total_area=round(total_area),
            avg_area=round(total_area / count) if count else 0,
            revealed_count=sum(1 for r in self._regions if r.revealed),
            completed_count=sum(1 for r in self._regions if r.completed),
        )
