"""
Interactive viewer for the rope simulation.
Display the grid and step through the motion script with keyboard commands.

Key presses are read on a background thread and handed over through a queue.
The simulation itself is only ever stepped by the display loop, so every
rendered frame shows whole steps.
"""

import logging
import os
import queue
import sys
import threading

import readchar
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from ascii_render import render_simulation
from motion_parser import read_ops
from rope import SimulationRun, parse_knot_count, prepare_simulation, simulation_from_ops

QUIT_KEY = "q"


class InteractiveDemo:
    """Step, play and reset a rope simulation from the keyboard."""

    def __init__(self, run: SimulationRun, refresh_per_second: float = 4) -> None:
        self.run = run
        self.initial_run = run.copy()  # Keep a copy of the original state
        self.console = Console()
        self.status_message = "Ready"
        self.playing = False
        self.speed = 1
        self.refresh_per_second = refresh_per_second

    def generate_display(self) -> Panel:
        """Generate the current display with grid and status."""
        simulation = self.run.simulation

        status = Text()
        status.append("Step: ", style="bold")
        status.append(f"{self.run.current_op_index}/{len(self.run.ops)}   ")
        status.append("Speed: ", style="bold")
        status.append(f"{self.speed}{' (playing)' if self.playing else ''}\n")
        status.append("Head: ", style="bold")
        status.append(f"{simulation.head}   ")
        status.append("Tail: ", style="bold")
        status.append(f"{simulation.tail}\n")
        status.append("Visited: ", style="bold")
        status.append(f"{simulation.tail_visited_count()}\n\n")

        # Convert ANSI-colored grid text to Rich Text
        status.append(Text.from_ansi(render_simulation(simulation)))
        status.append("\n\n")
        status.append("Keys:\n", style="bold cyan")
        status.append("  N / Space - Step once\n")
        status.append("  P - Play/pause\n")
        status.append("  + / - - Steps per refresh while playing\n")
        status.append("  R - Reset to start\n")
        status.append("  Q - Quit\n\n")

        status.append("─" * 40 + "\n", style="dim")
        status.append("Status: ", style="bold")
        status.append(self.status_message)

        return Panel(status, title="Rope Simulation", border_style="green")

    def step(self, count: int = 1) -> None:
        applied = 0
        while applied < count and self.run.step():
            applied += 1
        if self.run.finished:
            self.playing = False
            self.status_message = (
                f"✓ Finished: tail visited {self.run.simulation.tail_visited_count()} cells"
            )
        else:
            op = self.run.ops[self.run.current_op_index - 1] if applied else None
            self.status_message = f"Applied {applied} step(s), last: {op}"

    def tick(self) -> None:
        """One display refresh: advance by the current speed while playing."""
        if self.playing:
            self.step(self.speed)

    def reset(self) -> None:
        """Reset the simulation to its original state."""
        self.run = self.initial_run.copy()
        self.playing = False
        self.status_message = "Simulation reset to start"

    def handle_key(self, key: str) -> bool:
        """Apply one key press. Returns False when the viewer should exit."""
        key = key.lower()
        if key == QUIT_KEY:
            self.status_message = "Quitting..."
            return False
        elif key == "r":
            self.reset()
        elif key in ("n", " "):
            self.step()
        elif key == "p":
            self.playing = not self.playing and not self.run.finished
            self.status_message = "Playing" if self.playing else "Paused"
        elif key == "+":
            self.speed = min(self.speed + 1, 20)
            self.status_message = f"Speed: {self.speed}"
        elif key == "-":
            self.speed = max(self.speed - 1, 1)
            self.status_message = f"Speed: {self.speed}"
        else:
            self.status_message = f"Unknown key: {repr(key)}"
        return True

    def run_viewer(self, keys: "queue.Queue[str] | None" = None) -> None:
        """
        Run the viewer until the user quits.

        Args:
            keys: Queue of key presses; by default one is filled from the
                terminal on a background thread
        """
        if keys is None:
            keys = queue.Queue()
            threading.Thread(target=_read_keys, args=(keys,), daemon=True).start()

        frame_delay = 1 / self.refresh_per_second
        with Live(self.generate_display(), console=self.console, auto_refresh=False) as live:
            try:
                while True:
                    live.update(self.generate_display(), refresh=True)
                    try:
                        key = keys.get(timeout=frame_delay)
                    except queue.Empty:
                        self.tick()
                        continue
                    if not self.handle_key(key):
                        live.update(self.generate_display(), refresh=True)
                        break
            except KeyboardInterrupt:
                self.status_message = "Interrupted by user"
                live.update(self.generate_display(), refresh=True)


def _read_keys(keys: "queue.Queue[str]") -> None:
    """Forward terminal key presses to the display loop."""
    while True:
        try:
            key = readchar.readkey()
        except KeyboardInterrupt:
            key = QUIT_KEY
        keys.put(key)
        if key.lower() == QUIT_KEY:
            return


SCRIPTS = dict(
    small="R 4\nU 4\nL 3\nD 1\nR 4\nD 1\nL 5\nR 2\n",
    large="R 5\nU 8\nL 8\nD 3\nR 17\nD 10\nL 25\nU 20\n",
)


def load_run(name: str, knots: str) -> SimulationRun:
    """
    Build a run from a sample script name or a file path.

    Raises:
        ValueError: On a bad knot count, a malformed script or undecodable text
        OSError: If the file cannot be read
    """
    knot_count = parse_knot_count(knots)
    if name in SCRIPTS:
        return prepare_simulation(SCRIPTS[name], knot_count)
    return simulation_from_ops(read_ops(name), knot_count)


def main(argv: list[str]) -> int:
    """Usage: interactive_demo.py [small|large|INPUT] [KNOTS|short|long]."""
    logging.basicConfig(
        level=os.environ.get("ROPEGRID_LOG_LEVEL", "WARNING").upper(),
        format="%(levelname)s: %(message)s",
    )
    name = argv[1] if len(argv) > 1 else "small"
    knots = argv[2] if len(argv) > 2 else "short"

    try:
        run = load_run(name, knots)
    except (OSError, ValueError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    InteractiveDemo(run).run_viewer()
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
