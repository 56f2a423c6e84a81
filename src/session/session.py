"""
Game session: the single mutable aggregate for one game.

Owns the grid, the active piece, the upcoming-tile queue, score and level, and
drives the cascade resolver after every lock. Time only moves through
``advance()``, so the whole game is deterministic under test.
"""

import logging
from typing import Callable, List, Optional

from ..engine.cascade import CascadeResolver, CascadeResult
from ..engine.detector import WordPredicate
from ..engine.grid import Grid
from ..engine.letters import TileGenerator
from ..engine.models import ScoredWord, Tile
from ..engine.scoring import gravity_interval
from .lifecycle import ActivePiece
from .models import GameConfig, SessionSnapshot, Settings
from .storage import ScoreStore

logger = logging.getLogger(__name__)


class GameSession:
    """
    Manages one game from start to game over.

    Player actions (``move``, ``soft_drop``, ``hard_drop``) return a bool or a
    distance and never raise for illegal moves. They are rejected while the
    game is paused, over, or resolving a cascade.

    Attributes:
        config: Rules and timing
        grid: The board
        piece: The falling piece, None between lock and spawn
        upcoming: Queue of the next tiles
        score, level, words_formed: Progress counters
        recent_words: Last few scored words, most recent first
        high_score: Best score loaded from the store
    """

    def __init__(
        self,
        is_valid_word: WordPredicate,
        config: Optional[GameConfig] = None,
        store: Optional[ScoreStore] = None,
        tile_source: Optional[TileGenerator] = None,
        on_change: Optional[Callable[[SessionSnapshot], None]] = None,
    ):
        self.config = config or GameConfig()
        self.is_valid_word = is_valid_word
        self.store = store
        self.tiles = tile_source or TileGenerator(seed=self.config.seed)
        self.on_change = on_change
        self.premium_layout = self.config.premium_layout()

        self.high_score = store.load_high_score() if store else 0
        self.settings = store.load_settings() if store else Settings()

        self.resolver = CascadeResolver(
            is_valid_word,
            premium_layout=self.premium_layout,
            max_depth=self.config.max_cascade_depth,
            count_combos=self.config.count_combos,
            words_per_level=self.config.words_per_level,
            max_level=self.config.max_level,
        )
        self.started = False
        self._reset_state()

    def _reset_state(self) -> None:
        self.grid = Grid(self.config.width, self.config.height)
        self.piece: Optional[ActivePiece] = None
        self.upcoming: List[Tile] = []
        self.score = 0
        self.level = 1
        self.words_formed = 0
        self.recent_words: List[ScoredWord] = []
        self.cascade_depth = 0
        self.last_cascade: Optional[CascadeResult] = None
        self.paused = False
        self.game_over = False
        self._gravity_elapsed = 0
        self._cascade_elapsed = 0
        self.resolver.reset()

    # Lifecycle

    def start(self) -> None:
        """Start a fresh game, discarding any current one."""
        self._reset_state()
        self.upcoming = self.tiles.draw(self.config.queue_size)
        self.started = True
        self._spawn_next()
        self._publish()

    def reset(self) -> None:
        self.start()

    def pause(self) -> bool:
        if not self.playing or self.paused:
            return False
        self.paused = True
        self._publish()
        return True

    def resume(self) -> bool:
        if not self.paused:
            return False
        self.paused = False
        self._publish()
        return True

    @property
    def playing(self) -> bool:
        return self.started and not self.game_over

    @property
    def cascading(self) -> bool:
        return self.resolver.active

    @property
    def accepts_input(self) -> bool:
        return self.playing and not self.paused and not self.cascading and self.piece is not None

    @property
    def gravity_interval_ms(self) -> int:
        return gravity_interval(
            self.level,
            self.config.gravity_base_ms,
            self.config.gravity_decrement_ms,
            self.config.gravity_min_ms,
        )

    # Player actions

    def move(self, dx: int) -> bool:
        if not self.accepts_input:
            return False
        moved = self.piece.move(self.grid, dx)
        if moved:
            self._publish()
        return moved

    def move_left(self) -> bool:
        return self.move(-1)

    def move_right(self) -> bool:
        return self.move(1)

    def soft_drop(self) -> bool:
        if not self.accepts_input:
            return False
        was_pending = self.piece.lock_delay_active
        moved = self.piece.soft_drop(self.grid)
        if moved:
            self.score += self.config.soft_drop_points
        if moved or self.piece.lock_delay_active != was_pending:
            self._publish()
        return moved

    def hard_drop(self) -> int:
        """Drop and lock at once. Returns the number of rows dropped."""
        if not self.accepts_input:
            return 0
        distance = self.piece.hard_drop(self.grid)
        self.score += distance * self.config.hard_drop_points
        self._lock()
        return distance

    def tick(self) -> bool:
        """One gravity step for the active piece."""
        if not self.accepts_input:
            return False
        was_pending = self.piece.lock_delay_active
        moved = self.piece.gravity_tick(self.grid)
        if moved or self.piece.lock_delay_active != was_pending:
            self._publish()
        return moved

    # Time

    def advance(self, elapsed_ms: int) -> None:
        """
        Move game time forward, firing gravity ticks, lock-delay expiry and
        cascade steps in the order they fall due. Does nothing while paused
        or after game over; timers keep their remaining durations.
        """
        if elapsed_ms < 0:
            raise ValueError(f"elapsed_ms must be non-negative, got {elapsed_ms}")

        remaining = elapsed_ms
        while remaining > 0 and self.playing and not self.paused:
            if self.cascading:
                wait = self.config.cascade_delay_ms - self._cascade_elapsed
                if wait > remaining:
                    self._cascade_elapsed += remaining
                    break
                remaining -= wait
                self._step_cascade()
                continue

            if self.piece is None:
                break

            gravity_wait = self.gravity_interval_ms - self._gravity_elapsed
            step = max(gravity_wait, 0)
            if self.piece.lock_delay_active:
                step = min(step, self.piece.lock_delay_remaining)

            if step > remaining:
                self._gravity_elapsed += remaining
                self.piece.advance(remaining)
                break

            remaining -= step
            self._gravity_elapsed += step
            if self.piece.advance(step):
                self._lock()
                continue
            if self._gravity_elapsed >= self.gravity_interval_ms:
                self._gravity_elapsed = 0
                self.tick()

    # Internals

    def _spawn_next(self) -> None:
        tile = self.upcoming.pop(0)
        self.upcoming.append(self.tiles.next_tile())
        self.piece = ActivePiece(tile, self.config.spawn_position, self.config.lock_delay_ms)
        self._gravity_elapsed = 0

    def _lock(self) -> None:
        piece = self.piece
        prior_grid = self.grid.copy()
        # A tile blocked above the grid is lost; the top-out check ends the game
        self.grid.place(piece.tile, piece.position)
        self.piece = None
        self.cascade_depth = 0

        if self.grid.is_topout_full():
            self._end_game()
            self._publish()
            return

        found = self.resolver.start(self.grid, prior_grid, self.level, self.words_formed)
        if not found:
            self.last_cascade = self.resolver.result
            self._spawn_next()
            self._publish()
            return

        self._cascade_elapsed = 0
        self._publish()
        if self.config.cascade_delay_ms == 0:
            while self.cascading:
                self._step_cascade()

    def _step_cascade(self) -> None:
        word = self.resolver.step()
        self._cascade_elapsed = 0
        if word is not None:
            self.score += word.final_score
            self.words_formed += 1
            self.recent_words = ([word] + self.recent_words)[:self.config.recent_words_limit]
        self.cascade_depth = self.resolver.depth

        if not self.cascading:
            result = self.resolver.result
            self.score += result.line_score
            self.level = result.level
            self.last_cascade = result
            self._spawn_next()
        self._publish()

    def _end_game(self) -> None:
        self.game_over = True
        if self.score > self.high_score:
            logger.info("New high score: %d (was %d)", self.score, self.high_score)
            self.high_score = self.score
            if self.store:
                self.store.save_high_score(self.score)

    def update_settings(self, **changes) -> Settings:
        """Merge and persist settings changes."""
        self.settings = Settings(**{**self.settings.model_dump(), **changes})
        if self.store:
            self.store.save_settings(self.settings)
        return self.settings

    def snapshot(self) -> SessionSnapshot:
        pending = self.resolver.pending
        return SessionSnapshot(
            grid=[row.copy() for row in self.grid.cells],
            active_tile=self.piece.tile if self.piece else None,
            active_position=self.piece.position if self.piece else None,
            upcoming=list(self.upcoming),
            score=self.score,
            level=self.level,
            words_formed=self.words_formed,
            recent_words=list(self.recent_words),
            cascade_depth=self.cascade_depth,
            cascade_phase=self.resolver.phase,
            animating_positions=list(pending.positions) if pending else [],
            lock_delay_active=self.piece.lock_delay_active if self.piece else False,
            paused=self.paused,
            game_over=self.game_over,
            high_score=self.high_score,
        )

    def _publish(self) -> None:
        if self.on_change:
            self.on_change(self.snapshot())
