from dataclasses import dataclass
from enum import Enum

from simulator.errors import IoError, ParseError, TransformationError

TOKENS_PER_RULE = 5


# === Head Moves ===
class Move(Enum):
    L = "L"
    R = "R"

    @classmethod
    def parse(cls, token):
        try:
            return cls(token)
        except ValueError:
            raise TransformationError(token) from None


# === Rule ===
@dataclass(frozen=True)
class Rule:
    current_state: str
    read_symbol: str
    write_symbol: str
    move: Move
    next_state: str

    def matches(self, state, symbol):
        return self.current_state == state and self.read_symbol == symbol

    def __str__(self):
        return f"{self.current_state} {self.read_symbol} {self.write_symbol} {self.move.value} {self.next_state}"


# === Parsing ===
def parse_rule(line_number, line_text, path="<input>"):
    """Parse one `<current> <read> <write> <L|R> <next>` line into a Rule."""
    tokens = line_text.split()
    if len(tokens) != TOKENS_PER_RULE:
        raise ParseError(path, line_number)

    current, read, write, step, next_state = tokens
    return Rule(current, read, write, Move.parse(step), next_state)


def load_rules(text, path="<input>"):
    """
    Parse a whole rule program.
    Blank lines are dropped before numbering, so line numbers in errors count
    rules only. The first bad line aborts the load.
    """
    lines = [line.strip() for line in text.splitlines()]
    lines = [line for line in lines if line]
    return tuple(parse_rule(number, line, path) for number, line in enumerate(lines, start=1))


def load_rules_file(path):
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise IoError(f"Cannot read rule file {path}: {e}") from e
    return load_rules(text, str(path))


# === Derived Views ===
def distinct_states(rules):
    """All state names used as a current or next state, sorted."""
    states = set()
    for rule in rules:
        states.add(rule.current_state)
        states.add(rule.next_state)
    return sorted(states)


def shadowed_rules(rules):
    """
    Rules that can never fire because an earlier rule already claims the same
    (current_state, read_symbol) pair.
    Returns (index, rule, winner_index) tuples, indices 0-based in table order.
    """
    first_seen = {}
    shadowed = []
    for idx, rule in enumerate(rules):
        key = (rule.current_state, rule.read_symbol)
        if key in first_seen:
            shadowed.append((idx, rule, first_seen[key]))
        else:
            first_seen[key] = idx
    return shadowed
