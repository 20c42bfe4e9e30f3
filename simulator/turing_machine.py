import time

from rich.cells import cell_len

from simulator.errors import IoError, TapeError
from simulator.rules import Move


def load_tape(text):
    """Whitespace-separated tokens become the tape cells, in order."""
    tape = text.split()
    if not tape:
        raise TapeError("Tape is empty: at least one cell is required")
    return tape


def load_tape_file(path):
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise IoError(f"Cannot read tape file {path}: {e}") from e
    return load_tape(text)


class Machine:
    """A single-tape machine on a fixed-length circular tape."""

    def __init__(self, tape, state, head=0):
        self.tape = list(tape)
        if not self.tape:
            raise TapeError("Tape is empty: at least one cell is required")
        if not 0 <= head < len(self.tape):
            raise TapeError(f"Head {head} is outside the tape (0..{len(self.tape) - 1})")
        self.head = head
        self.state = state
        self.steps = 0

    def find_rule(self, rules):
        symbol = self.tape[self.head]
        for rule in rules:
            if rule.matches(self.state, symbol):
                return rule
        return None

    def halted(self, rules):
        return self.find_rule(rules) is None

    def step(self, rules):
        """Apply the first matching rule. Returns False, changing nothing, when none matches."""
        rule = self.find_rule(rules)
        if rule is None:
            return False

        self.tape[self.head] = rule.write_symbol
        if rule.move is Move.L:
            self.head = len(self.tape) - 1 if self.head == 0 else self.head - 1
        else:
            self.head = (self.head + 1) % len(self.tape)
        self.state = rule.next_state
        self.steps += 1
        return True

    def run(self, rules, max_steps=None, on_step=None, delay=0.0):
        """
        Step until no rule matches or `max_steps` rules have been applied
        (None or 0 means no limit). `on_step` sees every configuration,
        including the starting and the final one.
        Returns the number of rules applied by this call.
        """
        applied = 0
        while True:
            if on_step:
                on_step(self)
            if max_steps and applied >= max_steps:
                break
            if delay:
                time.sleep(delay)
            if not self.step(rules):
                break
            applied += 1
        return applied

    def format(self):
        """STATE line, tape line and a caret line pointing at the head cell."""
        tape_line = "".join(f"{cell} " for cell in self.tape)

        caret_line = ""
        for idx, cell in enumerate(self.tape):
            if idx == self.head:
                caret_line += "^" + " " * cell_len(cell)
            else:
                caret_line += " " * (cell_len(cell) + 1)

        return f"STATE: {self.state}\n{tape_line}\n{caret_line}"

    def snapshot(self):
        return {
            "state": self.state,
            "head": self.head,
            "tape": list(self.tape),
            "steps": self.steps,
        }

    def __repr__(self):
        return f"Machine(state={self.state!r}, head={self.head}, tape={self.tape!r})"
