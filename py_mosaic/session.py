"""
Check-in session: one day's board bound to one day's task list.

The session owns the region store, the renderer and the tap dispatcher.
It resolves taps to regions, completes the matching tasks, keeps the score
and writes a ``CheckinRecord`` after every change so the board can be
restored later the same day.
"""

from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence

import structlog

from .config import Settings, settings as default_settings
from .core.alea_prng import AleaPRNG
from .core.geometry import PointLike
from .core.hit_test import MISS, hit_test
from .core.palette import DEFAULT_PALETTE, Palette
from .core.regions import RegionStats, RegionStore
from .core.renderer import DrawingSurface, Renderer, RendererOptions
from .core.taps import TapDispatcher, TapEvent, TapKind
from .exceptions import SessionNotStartedError, SurfaceUnavailableError
from .models import CheckinRecord, Quote, Task
from .records import CheckinRepository, InMemoryCheckinRepository
from .render.background import render_quote_background
from .utils.random import get_prng

logger = structlog.get_logger()

SurfaceFactory = Callable[[int, int], DrawingSurface]


@dataclass(frozen=True)
class CompletionResult:
    """What happened when a task was completed through its region."""

    index: int
    changed: bool
    score_delta: int
    score_total: int
    all_revealed: bool


class CheckinSession:
    """Interactive board for one date."""

    def __init__(self, tasks: Sequence[Task], date: str,
                 settings: Optional[Settings] = None,
                 repository: Optional[CheckinRepository] = None,
                 prng: Optional[AleaPRNG] = None,
                 palette: Palette = DEFAULT_PALETTE,
                 renderer_options: Optional[RendererOptions] = None):
        self.settings = settings or default_settings
        self.date = date
        self.tasks: List[Task] = [task.model_copy() for task in tasks]
        self.repository = repository if repository is not None else InMemoryCheckinRepository()

        if prng is None:
            seed = self.settings.default_seed
            prng = AleaPRNG(seed) if seed else get_prng()
        self.prng = prng

        self.store = RegionStore(
            palette=palette,
            disturbance_level=self.settings.disturbance_level,
            device_pixel_ratio=self.settings.device_pixel_ratio,
        )
        self.taps = TapDispatcher(self.settings.double_tap_window_ms)
        self.renderer_options = renderer_options or RendererOptions(
            margin=self.settings.canvas_margin
        )

        self.surface: Optional[DrawingSurface] = None
        self.renderer: Optional[Renderer] = None
        self.background: Optional[Any] = None
        self.score_total = 0

    @property
    def started(self) -> bool:
        return self.renderer is not None

    @property
    def is_complete(self) -> bool:
        """All regions revealed. A day without tasks is never complete."""
        return bool(self.tasks) and len(self.store) > 0 and self.store.is_fully_revealed()

    @property
    def completion_rate(self) -> int:
        """Completed tasks as a rounded percentage."""
        if not self.tasks:
            return 0
        done = sum(1 for task in self.tasks if task.completed)
        return round(done / len(self.tasks) * 100)

    def start(self, surface_factory: SurfaceFactory, quote: Optional[Quote] = None,
              background: Optional[Any] = None) -> None:
        """
        Acquire the surface, prepare the background and build the board.

        The surface is acquired before anything else; if that fails the
        board is not generated and ``SurfaceUnavailableError`` is raised.

        Args:
            surface_factory: Called with (width, height), returns a surface
            quote: Quote painted on the background when ``background`` is None
            background: Ready-made background image
        """
        width = self.settings.canvas_width
        height = self.settings.canvas_height
        try:
            surface = surface_factory(width, height)
        except Exception as e:
            logger.error("Surface acquisition failed", date=self.date, error=str(e))
            raise SurfaceUnavailableError(f"Could not acquire drawing surface: {e}") from e
        if surface is None:
            raise SurfaceUnavailableError("Surface factory returned no surface")

        self.surface = surface
        self.renderer = Renderer(surface, self.renderer_options)

        if background is None and quote is not None:
            try:
                background = render_quote_background(quote, width, height)
            except (OSError, ValueError) as e:
                logger.warning("Quote background failed, rendering without it", error=str(e))
                background = None
        self.background = background

        record = self.repository.load(self.date)
        if record is not None and self.tasks and record.region_count == len(self.tasks):
            self._restore(record)
        else:
            self._generate()
            if self.tasks:
                self._save()

        self.render()

    def _generate(self) -> None:
        self.taps.reset()
        if not self.tasks:
            self.store.clear()
            logger.info("No tasks for the day, board left empty", date=self.date)
            return
        self.store.generate(self.settings.board_rect, len(self.tasks), self.tasks, self.prng)

    def _restore(self, record: CheckinRecord) -> None:
        self._generate()
        self.store.restore(record.revealed_region_ids)
        for index in self.store.revealed_indices():
            self.tasks[index].completed = True
        self.score_total = record.score_total
        logger.info("Session restored", date=self.date,
                    revealed=len(self.store.revealed_indices()), score=self.score_total)

    def _require_started(self) -> None:
        if not self.started:
            raise SessionNotStartedError("Session has not been started")

    def render(self) -> None:
        self._require_started()
        self.renderer.render(self.store.all_regions(), self.background)

    def set_tasks(self, tasks: Sequence[Task]) -> None:
        """
        Replace the task list.

        With the same count the board is kept: revealed regions mark their
        new tasks completed and region colors follow the new difficulties.
        A different task count regenerates the board: previous reveals and
        the score are dropped and old region references become stale.
        """
        count_changed = len(tasks) != len(self.tasks)
        self.tasks = [task.model_copy() for task in tasks]
        if not count_changed:
            if self.started and len(self.store) == len(self.tasks):
                for index in self.store.revealed_indices():
                    self.tasks[index].completed = True
                self.store.bind_tasks(self.tasks)
                self.render()
            return

        self.score_total = 0
        if not self.started:
            return
        self._generate()
        logger.info("Task count changed, board regenerated", tasks=len(self.tasks),
                    epoch=self.store.epoch)
        if self.tasks:
            self._save()
        self.render()

    def complete_task(self, index: int) -> CompletionResult:
        """
        Complete task ``index`` and reveal its region.

        Repeated calls are harmless: the score is only granted on the call
        that actually changes the region.
        """
        self._require_started()

        result = self.store.reveal(index)
        if not result.changed:
            return CompletionResult(index, False, 0, self.score_total, self.is_complete)

        task = self.tasks[index]
        score_delta = 0 if task.completed else task.score
        task.completed = True
        self.score_total += score_delta

        self._save()
        self.render()

        all_revealed = self.is_complete
        logger.info("Task completed", index=index, task=task.id, score_delta=score_delta,
                    score_total=self.score_total, all_revealed=all_revealed)
        return CompletionResult(index, True, score_delta, self.score_total, all_revealed)

    def _activate(self, event: TapEvent) -> Optional[CompletionResult]:
        index = hit_test(event.point, self.store.all_regions())
        if index == MISS:
            return None
        if self.store.region(index).revealed:
            logger.debug("Region already revealed, activation ignored", index=index)
            return None
        return self.complete_task(index)

    def handle_tap(self, point: PointLike, timestamp_ms: int) -> Optional[CompletionResult]:
        """Feed a tap; the second tap of a double tap completes the task under it."""
        self._require_started()
        event = self.taps.tap(point, timestamp_ms)
        if event is None or event.kind is not TapKind.DOUBLE:
            return None
        return self._activate(event)

    def flush_taps(self, timestamp_ms: int) -> Optional[TapEvent]:
        """Release a pending single tap. Single taps do not change the board."""
        return self.taps.flush(timestamp_ms)

    def handle_long_press(self, point: PointLike, timestamp_ms: int) -> Optional[CompletionResult]:
        self._require_started()
        return self._activate(self.taps.long_press(point, timestamp_ms))

    def to_record(self) -> CheckinRecord:
        return CheckinRecord(
            date=self.date,
            revealed_region_ids=self.store.revealed_indices(),
            score_total=self.score_total,
            region_count=len(self.store),
        )

    def _save(self) -> None:
        self.repository.save(self.to_record())

    def stats(self) -> RegionStats:
        return self.store.stats()

    def close(self) -> None:
        """Tear down: the board is discarded, nothing partial is persisted."""
        self.store.clear()
        self.taps.reset()
        self.surface = None
        self.renderer = None
        self.background = None
