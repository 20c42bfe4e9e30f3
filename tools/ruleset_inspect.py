import argparse
import sys

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from simulator.errors import TuringError
from simulator.rules import distinct_states, load_rules_file, shadowed_rules

console = Console(highlight=False, emoji=False)

def read_symbols(rules):
    """All symbols a rule can read, sorted."""
    return sorted({rule.read_symbol for rule in rules})

def transition_grid(rules):
    """
    Map (state, symbol) -> action string for the rule that wins under
    first-match semantics. Pairs with no rule are absent (the machine halts there).
    """
    grid = {}
    for rule in rules:
        key = (rule.current_state, rule.read_symbol)
        if key not in grid:
            grid[key] = f"{rule.write_symbol} {rule.move.value} {rule.next_state}"
    return grid

def latex_table(rules):
    states = distinct_states(rules)
    symbols = read_symbols(rules)
    grid = transition_grid(rules)

    lines = [r"\begin{array}{c|" + "c" * len(symbols) + "}"]
    lines.append("State/Symbol & " + " & ".join([f"\\text{{{s}}}" for s in symbols]) + r" \\ \hline")
    for state in states:
        row = [state] + [grid.get((state, symbol), "HALT") for symbol in symbols]
        lines.append(" & ".join(row) + r" \\")
    lines.append(r"\end{array}")
    return "\n".join(lines)

def pretty_print_ruleset(rules, latex=False):
    """Print the rules, the discovered states and the state x symbol transition table."""
    # === Rules in program order ===
    rule_table = Table(title="Rules", show_header=True, header_style="bold magenta")
    for column in ("#", "State", "Read", "Write", "Move", "Next"):
        rule_table.add_column(column, justify="center")
    dead = {idx for idx, _, _ in shadowed_rules(rules)}
    for idx, rule in enumerate(rules):
        style = "dim" if idx in dead else None
        rule_table.add_row(
            str(idx + 1), escape(rule.current_state), escape(rule.read_symbol),
            escape(rule.write_symbol), rule.move.value, escape(rule.next_state), style=style,
        )
    console.print(rule_table)

    console.print("\n[bold]Possible states:[/bold]")
    for state in distinct_states(rules):
        console.print(f"  {state}", markup=False)

    # === Transition Table ===
    symbols = read_symbols(rules)
    grid = transition_grid(rules)
    grid_table = Table(title="Transition Table", show_header=True, header_style="bold cyan")
    grid_table.add_column(" ")
    for symbol in symbols:
        grid_table.add_column(escape(symbol), justify="center")
    for state in distinct_states(rules):
        grid_table.add_row(escape(state), *[escape(grid.get((state, symbol), "HALT")) for symbol in symbols])
    console.print(grid_table)

    shadowed = shadowed_rules(rules)
    if shadowed:
        console.print("\n[yellow]Unreachable rules (shadowed by an earlier rule):[/yellow]")
        for idx, rule, winner in shadowed:
            console.print(f"  rule {idx + 1} `{rule}` never fires, rule {winner + 1} matches first", markup=False)

    if latex:
        console.print("\n=== LaTeX Table ===")
        console.print(latex_table(rules), markup=False, soft_wrap=True)

def main(argv=None):
    parser = argparse.ArgumentParser(description="Turing Machine Rule Program Inspector")
    parser.add_argument("rules", help="Rule program file, one `<state> <read> <write> <L|R> <next>` per line")
    parser.add_argument("--latex", action="store_true", help="Also print the transition table as a LaTeX array")
    args = parser.parse_args(argv)

    try:
        rules = load_rules_file(args.rules)
    except TuringError as e:
        Console(stderr=True, emoji=False).print(f"Error: {e}", style="red", markup=False, soft_wrap=True)
        return 1

    console.print(f"[INFO] Loaded {len(rules):,} rules from {args.rules}", markup=False)
    pretty_print_ruleset(rules, latex=args.latex)
    return 0

if __name__ == "__main__":
    sys.exit(main())
