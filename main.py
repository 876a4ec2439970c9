from __future__ import annotations

import argparse
import logging
import random
import sys
import threading
import tkinter as tk
from tkinter import messagebox, ttk
from typing import List, Optional, Sequence, Tuple

from config import MODES, GameMode, clue_override, configure_logging, get_mode
from errors import PuzzleError
from model import MoveOutcome
from session import GameSession

Cell = Tuple[int, int]

logger = logging.getLogger(__name__)

CELL_COLORS = {
    "clue": "black",
    "locked": "dark green",
    "wrong": "red",
    "open": "blue",
}


class SudokuApp:
    def __init__(self, clues: Optional[int] = None, seed: Optional[int] = None) -> None:
        self.clues = clues
        self.seed = seed
        self.session: Optional[GameSession] = None
        self.mode: Optional[GameMode] = None
        self.selected_cell: Optional[Cell] = None
        self.generating = False
        self._timer_job: Optional[str] = None

        self.root = tk.Tk()
        self.root.title("Sudoku Game")
        self.root.resizable(False, False)
        self.cell_size = 50
        self.margin = 20

        self.menu_frame = ttk.Frame(self.root, padding=20)
        ttk.Label(self.menu_frame, text="Sudoku", font=("Arial", 20, "bold")).grid(
            row=0, column=0, pady=(0, 12)
        )
        self._menu_buttons: List = []
        for i, mode in enumerate(MODES.values(), start=1):
            btn = ttk.Button(
                self.menu_frame,
                text=f"{mode.name.title()} ({mode.rows}x{mode.cols})",
                command=lambda m=mode: self.start_game(m),
            )
            btn.grid(row=i, column=0, pady=4, sticky="ew")
            self._menu_buttons.append(btn)

        self.game_frame = ttk.Frame(self.root)
        self.canvas = tk.Canvas(self.game_frame, bg="white", highlightthickness=0)
        self.canvas.grid(row=0, column=0, padx=10, pady=10)
        self.canvas.bind("<Button-1>", self.on_click)
        self.root.bind("<Key>", self.on_key_press)

        control_frame = ttk.Frame(self.game_frame)
        control_frame.grid(row=0, column=1, sticky="ns", padx=(0, 10), pady=10)
        self.time_var = tk.StringVar(value="Time: 00:00")
        self.status_var = tk.StringVar(value="Choose a mode to start.")
        ttk.Label(control_frame, textvariable=self.time_var, font=("Arial", 12, "bold")).grid(
            row=0, column=0, pady=(0, 8), sticky="w"
        )
        check_btn = ttk.Button(control_frame, text="Check", command=self.check)
        check_btn.grid(row=1, column=0, pady=2, sticky="ew")
        hint_btn = ttk.Button(control_frame, text="Hint", command=self.hint)
        hint_btn.grid(row=2, column=0, pady=2, sticky="ew")
        home_btn = ttk.Button(control_frame, text="Home", command=self.go_home)
        home_btn.grid(row=3, column=0, pady=2, sticky="ew")
        self._control_buttons = [check_btn, hint_btn, home_btn]
        ttk.Label(
            self.root, textvariable=self.status_var, anchor="w", padding=(10, 0, 10, 8)
        ).grid(row=1, column=0, sticky="ew")

        self.show_menu()

    def show_menu(self) -> None:
        self._stop_timer()
        self.session = None
        self.game_frame.grid_forget()
        self.menu_frame.grid(row=0, column=0)
        self.root.title("Sudoku Game")
        self.status_var.set("Choose a mode to start.")

    def start_game(self, mode: GameMode) -> None:
        if self.generating:
            return
        self.generating = True
        self.mode = mode
        for btn in self._menu_buttons:
            btn.state(["disabled"])
        self.status_var.set("Generating puzzle...")
        clues = self.clues
        rng = random.Random(self.seed)

        def worker() -> None:
            try:
                session = GameSession(mode, rng=rng, clues=clues)
            except PuzzleError as e:
                self.root.after(0, lambda: self._on_generation_failed(e))
                return
            self.root.after(0, lambda: self._on_game_ready(session))

        threading.Thread(target=worker, daemon=True).start()

    def _on_generation_failed(self, error: Exception) -> None:
        logger.error("Puzzle generation failed: %s", error)
        self.generating = False
        for btn in self._menu_buttons:
            btn.state(["!disabled"])
        messagebox.showerror("Error", f"Failed to create puzzle: {error}")
        self.status_var.set("Choose a mode to start.")

    def _on_game_ready(self, session: GameSession) -> None:
        self.generating = False
        for btn in self._menu_buttons:
            btn.state(["!disabled"])
        self.session = session
        self.selected_cell = None
        layout = session.board.layout
        canvas_size = self.margin * 2 + self.cell_size * layout.size
        self.canvas.config(width=canvas_size, height=canvas_size)
        self.menu_frame.grid_forget()
        self.game_frame.grid(row=0, column=0)
        self.root.title(session.mode.title)
        self._set_controls_enabled(True)
        self.status_var.set(
            f"{session.board.filled_count} clues. Click a cell and type a digit."
        )
        session.start()
        self.time_var.set(session.elapsed_text())
        self._schedule_tick()
        self.draw()

    def _schedule_tick(self) -> None:
        self._timer_job = self.root.after(1000, self._tick)

    def _tick(self) -> None:
        self._timer_job = None
        if self.session is None:
            return
        self.session.tick()
        self.time_var.set(self.session.elapsed_text())
        self._schedule_tick()

    def _stop_timer(self) -> None:
        if self._timer_job is not None:
            self.root.after_cancel(self._timer_job)
            self._timer_job = None

    def coords_to_cell(self, x: int, y: int) -> Optional[Cell]:
        if self.session is None:
            return None
        layout = self.session.board.layout
        col = (x - self.margin) // self.cell_size
        row = (y - self.margin) // self.cell_size
        if layout.in_bounds(row, col):
            return row, col
        return None

    def on_click(self, event) -> None:
        cell = self.coords_to_cell(event.x, event.y)
        if cell is None:
            return
        self.selected_cell = cell
        self.status_var.set(
            f"Selected cell r{cell[0]+1} c{cell[1]+1}. "
            f"Type a digit 1-{self.session.board.layout.size}."
        )
        self.draw()

    def on_key_press(self, event) -> None:
        if self.session is None or self.selected_cell is None or self.session.is_won:
            return
        row, col = self.selected_cell
        size = self.session.board.layout.size
        if event.char and event.char.isdigit() and 1 <= int(event.char) <= size:
            value = int(event.char)
        elif event.keysym in ("BackSpace", "Delete") or event.char == "0":
            value = 0
        else:
            return
        if self.session.cell_status(row, col) in ("clue", "locked"):
            self.status_var.set(f"Cell r{row+1} c{col+1} cannot be changed.")
            return
        outcome = self.session.enter(row, col, value)
        self._handle_outcome(outcome, row, col, value)
        self.draw()

    def _handle_outcome(self, outcome: MoveOutcome, row: int, col: int, value: int) -> None:
        if outcome is MoveOutcome.WON:
            self.show_winning_screen()
        elif outcome.is_conflict:
            where = outcome.value.split("-")[1]
            self.status_var.set(f"{value} already appears in this {where}.")
        elif value:
            self.status_var.set(f"Set r{row+1} c{col+1} to {value}.")
        else:
            self.status_var.set(f"Cleared r{row+1} c{col+1}.")

    def check(self) -> None:
        if self.session is None:
            return
        results = self.session.check()
        wrong = sum(1 for ok in results.values() if not ok)
        self.status_var.set(
            f"Checked {len(results)} entries: {len(results) - wrong} right, {wrong} wrong."
        )
        self.draw()

    def hint(self) -> None:
        if self.session is None or self.session.is_won:
            return
        revealed = self.session.hint()
        if revealed is None:
            self.status_var.set("No hint this time. Try again.")
        else:
            (r, c), value = revealed
            self.status_var.set(f"Hint: r{r+1} c{c+1} is {value}.")
        self.draw()
        if self.session.is_won:
            self.show_winning_screen()

    def go_home(self) -> None:
        if self.session is None:
            return
        self.session.pause()
        if messagebox.askyesno("Leave game", "Return to the menu? Progress will be lost."):
            self.show_menu()
        else:
            self.session.resume()

    def show_winning_screen(self) -> None:
        self._stop_timer()
        self._set_controls_enabled(False)
        final_time = self.session.elapsed_text()
        self.status_var.set(f"Solved! {final_time}")
        mode = self.session.mode
        if messagebox.askyesno("You won!", f"Puzzle solved.\n{final_time}\n\nPlay again?"):
            self.start_game(mode)
        else:
            self.show_menu()

    def _set_controls_enabled(self, enabled: bool) -> None:
        state = "!disabled" if enabled else "disabled"
        for btn in self._control_buttons:
            btn.state([state])

    def draw(self) -> None:
        self.canvas.delete("all")
        if self.session is None:
            return
        self._draw_grid()
        self._draw_digits()

    def _draw_grid(self) -> None:
        layout = self.session.board.layout
        for r in range(layout.rows):
            for c in range(layout.cols):
                x0, y0, x1, y1 = self._cell_rect(r, c)
                self.canvas.create_rectangle(x0, y0, x1, y1, outline="black", width=1)
        for r0 in range(0, layout.rows, layout.box_height):
            for c0 in range(0, layout.cols, layout.box_width):
                x0, y0, _, _ = self._cell_rect(r0, c0)
                x1 = x0 + layout.box_width * self.cell_size
                y1 = y0 + layout.box_height * self.cell_size
                self.canvas.create_rectangle(x0, y0, x1, y1, outline="black", width=3)
        if self.selected_cell:
            x0, y0, x1, y1 = self._cell_rect(*self.selected_cell)
            self.canvas.create_rectangle(x0, y0, x1, y1, outline="blue", width=2)

    def _cell_rect(self, row: int, col: int) -> Tuple[int, int, int, int]:
        x0 = self.margin + col * self.cell_size
        y0 = self.margin + row * self.cell_size
        x1 = x0 + self.cell_size
        y1 = y0 + self.cell_size
        return x0, y0, x1, y1

    def _draw_digits(self) -> None:
        layout = self.session.board.layout
        for r in range(layout.rows):
            for c in range(layout.cols):
                val = self.session.display_value(r, c)
                if not val:
                    continue
                status = self.session.cell_status(r, c)
                x0, y0, x1, y1 = self._cell_rect(r, c)
                self.canvas.create_text(
                    (x0 + x1) // 2,
                    (y0 + y1) // 2,
                    text=str(val),
                    font=("Arial", 18, "bold" if status == "clue" else "normal"),
                    fill=CELL_COLORS[status],
                )

    def run(self) -> None:
        self.root.mainloop()


def format_grid(grid: Sequence[Sequence[int]], box_width: int, box_height: int) -> str:
    lines: List[str] = []
    for r, row in enumerate(grid):
        if r and r % box_height == 0:
            lines.append("-" * (2 * len(row) + 2 * (len(row) // box_width - 1) - 1))
        parts: List[str] = []
        for c, val in enumerate(row):
            if c and c % box_width == 0:
                parts.append("|")
            parts.append(str(val) if val else ".")
        lines.append(" ".join(parts))
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Play or generate Sudoku puzzles.")
    parser.add_argument("--mode", choices=sorted(MODES), default="normal")
    parser.add_argument("--clues", type=int, default=None, help="Target clue count.")
    parser.add_argument("--seed", type=int, default=None, help="Random seed.")
    parser.add_argument("--log-level", default=None, help="Logging level, e.g. DEBUG.")
    parser.add_argument(
        "--print",
        dest="print_only",
        action="store_true",
        help="Print a generated puzzle instead of opening the game window.",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)
    try:
        clues = args.clues if args.clues is not None else clue_override()
        if args.print_only:
            mode = get_mode(args.mode)
            session = GameSession(mode, rng=random.Random(args.seed), clues=clues)
            print(format_grid(session.board.copy_grid(), mode.box_width, mode.box_height))
            return 0
    except PuzzleError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    app = SudokuApp(clues=clues, seed=args.seed)
    app.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
