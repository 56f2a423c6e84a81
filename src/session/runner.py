import json
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional
from pydantic import BaseModel, ConfigDict, Field

from ..engine.data import WordList, load_bundled
from ..engine.detector import find_words
from ..engine.models import Position
from ..engine.scoring import effective_score, select_highest
from ..utils.grid_visualizer import render_grid
from .models import PieceResult, RunConfig, RunResult
from .session import GameSession
from .storage import ScoreStore


class GameRunner(BaseModel):
    """
    Headless driver that plays a session with a simple greedy policy.

    Each piece is steered to the reachable column where it would complete the
    best word, falling back to the deepest landing spot, and then dropped.
    Time is stepped in fixed increments so lock delays and cascade delays run
    exactly as they would under a real timer.

    Attributes:
        config: Run configuration
        session: The game being played
        piece_history: Results of every piece so far
        is_complete: Whether the run has finished
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    config: RunConfig = Field(default_factory=RunConfig)
    session: Optional[GameSession] = None
    piece_history: List[PieceResult] = Field(default_factory=list)
    is_complete: bool = False
    end_reason: str = ""
    started_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        config: Optional[RunConfig] = None,
        words: Optional[WordList] = None,
    ) -> "GameRunner":
        """
        Factory method to create a runner with its dictionary, store and session.

        Args:
            config: Optional RunConfig (defaults apply if omitted)
            words: Optional preloaded word list; otherwise loaded from
                ``config.dictionary_path`` or the bundled list

        Returns:
            Configured GameRunner instance
        """
        if config is None:
            config = RunConfig()

        if words is None:
            if config.dictionary_path:
                words = WordList()
                words.load_file(config.dictionary_path)
            else:
                words = load_bundled()

        store = ScoreStore(config.data_dir) if config.data_dir else None
        session = GameSession(words.contains, config=config.game, store=store)
        return cls(config=config, session=session)

    def setup(self) -> None:
        """Start a fresh game."""
        if self.session is None:
            raise ValueError("Session not initialized")
        self.session.start()
        self.piece_history = []
        self.is_complete = False
        self.end_reason = ""
        self.started_at = datetime.now()

    def _reachable_columns(self) -> List[int]:
        grid = self.session.grid
        x, y = self.session.piece.position
        columns = [x]
        left = x - 1
        while grid.can_place(Position(left, y)):
            columns.append(left)
            left -= 1
        right = x + 1
        while grid.can_place(Position(right, y)):
            columns.append(right)
            right += 1
        return sorted(columns)

    def choose_column(self) -> int:
        """Column where the active tile scores best, or lands deepest."""
        session = self.session
        piece = session.piece
        grid = session.grid

        best_column = piece.position.x
        best_key = None
        for x in self._reachable_columns():
            landing = grid.drop_position(Position(x, piece.position.y))
            trial = grid.copy()
            trial.place(piece.tile, landing)
            matches = find_words(trial, session.is_valid_word, grid, session.premium_layout)
            best = select_highest(matches, session.level)
            value = effective_score(best, session.level) if best else 0
            key = (value, landing.y, -abs(x - piece.position.x))
            if best_key is None or key > best_key:
                best_column, best_key = x, key
        return best_column

    def step(self) -> PieceResult:
        """
        Play a single piece: steer, drop, and wait out any cascade.

        Returns:
            PieceResult for the piece
        """
        session = self.session
        if session is None or not session.started:
            raise ValueError("Game not started. Call setup() first.")
        if self.is_complete:
            raise RuntimeError("Run is already complete")

        piece = session.piece
        letter = piece.tile.letter
        target = self.choose_column()
        direction = 1 if target > piece.position.x else -1
        while piece.position.x != target and session.move(direction):
            pass

        start_y = piece.position.y
        landing_y = session.grid.drop_position(piece.position).y
        previous_cascade = session.last_cascade

        if self.config.drop_mode == "hard":
            distance = session.hard_drop()
        else:
            # One soft drop per step; once blocked, wait out the lock delay
            while session.playing and session.piece is piece:
                if not session.soft_drop():
                    session.advance(self.config.step_ms)
            distance = landing_y - start_y

        while session.cascading:
            session.advance(self.config.step_ms)

        cascade = session.last_cascade if session.last_cascade is not previous_cascade else None
        result = PieceResult(
            piece_number=len(self.piece_history) + 1,
            letter=letter,
            column=piece.position.x,
            drop_distance=distance,
            words=cascade.words if cascade else [],
            lines_cleared=cascade.lines_cleared if cascade else 0,
            score_after=session.score,
            level_after=session.level,
            game_over=session.game_over,
        )
        self.piece_history.append(result)

        if session.game_over:
            self.is_complete = True
            self.end_reason = "Topped out"
        elif len(self.piece_history) >= self.config.max_pieces:
            self.is_complete = True
            self.end_reason = f"Max pieces ({self.config.max_pieces}) reached"

        return result

    def run(
        self,
        on_piece: Optional[Callable[[PieceResult], None]] = None,
        verbose: bool = False,
    ) -> RunResult:
        """
        Play until game over or the piece limit.

        Args:
            on_piece: Optional callback called after each piece
            verbose: If True, print progress to stdout

        Returns:
            RunResult containing the full run data
        """
        if not self.started_at:
            self.setup()

        if verbose:
            print(f"Starting run: {self.config.game.width}x{self.config.game.height} grid")
            print(f"Max pieces: {self.config.max_pieces}, drop mode: {self.config.drop_mode}")
            print("-" * 40)

        while not self.is_complete:
            result = self.step()

            if verbose:
                line = f"Piece {result.piece_number}: {result.letter} -> column {result.column}"
                if result.words:
                    words = ", ".join(f"{w.word} (+{w.final_score})" for w in result.words)
                    line += f" | {words}"
                if result.lines_cleared:
                    line += f" | {result.lines_cleared} row(s) cleared"
                print(line)
                if result.words:
                    print(render_grid(self.session.grid, premium_layout=self.session.premium_layout))
                    print(f"Score: {result.score_after}  Level: {result.level_after}")

            if on_piece:
                on_piece(result)

        if verbose:
            print("-" * 40)
            print(f"Run complete: {self.end_reason}")
            print("\n=== Final Grid ===")
            print(render_grid(self.session.grid, premium_layout=self.session.premium_layout))

        return self.get_result()

    def get_result(self) -> RunResult:
        """
        Get the final run result.

        Returns:
            RunResult containing full run data
        """
        ended_at = datetime.now()
        duration = (ended_at - self.started_at).total_seconds() if self.started_at else 0.0
        session = self.session

        return RunResult(
            config=self.config,
            pieces_played=len(self.piece_history),
            score=session.score,
            level=session.level,
            words_formed=session.words_formed,
            high_score=session.high_score,
            game_over=session.game_over,
            end_reason=self.end_reason,
            words=[w.word for piece in self.piece_history for w in piece.words],
            piece_history=self.piece_history,
            final_grid=session.grid.to_rows(),
            started_at=self.started_at.isoformat() if self.started_at else "",
            ended_at=ended_at.isoformat(),
            duration_seconds=duration,
        )

    def save_result(self, path: str | Path) -> None:
        """
        Save the run result to a JSON file.

        Args:
            path: Path to save the result file
        """
        result = self.get_result()
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w') as f:
            json.dump(result.model_dump(), f, indent=2, default=str)
