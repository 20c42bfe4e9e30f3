# app.py

import argparse
import sys

from rich.console import Console
from rich.prompt import Prompt

from config.config_loader import load_config, resolve_config_path, validate_config
from logger.logger import JSONLogger
from simulator.errors import ArgsError, ConfigError, IoError, TuringError
from simulator.rules import distinct_states, load_rules_file
from simulator.turing_machine import Machine, load_tape_file

console = Console(highlight=False, emoji=False)
err_console = Console(stderr=True, highlight=False, emoji=False)

# === Utilities ===
def usage(prog):
    return f"Usage: {prog} <input.turd> <input.tape>"

def build_parser(prog):
    parser = argparse.ArgumentParser(prog=prog, description="Circular-tape Turing machine simulator")
    parser.add_argument("files", nargs="*", help="Rule program file followed by tape file")
    parser.add_argument("--initial-state", help="Initial state (skips the interactive prompt)")
    parser.add_argument("--delay", type=float, help="Seconds between displayed steps")
    parser.add_argument("--max-steps", type=int, help="Stop after this many steps (0 = no limit)")
    parser.add_argument("--config", help="Path to a runtime config JSON file")
    parser.add_argument("--log", action="store_true", help="Write JSON-lines run logs")
    parser.add_argument("--verbose", action="store_true", help="Print config and run details")
    return parser

def ask_initial_state(states, show_states=True):
    if show_states:
        console.print("Possible states:")
        for state in states:
            console.print(state, markup=False)
    try:
        state = Prompt.ask("Initial_state", console=console)
    except (EOFError, OSError) as e:
        raise IoError(f"Cannot read initial state: {e}") from e
    console.print()
    return state

def show_machine(machine):
    console.print(machine.format(), markup=False, soft_wrap=True)

# === Run ===
def run(args, config):
    rule_file, tape_file = args.files[0], args.files[1]

    rules = load_rules_file(rule_file)
    tape = load_tape_file(tape_file)

    if args.verbose:
        console.print(f"[INFO] Loaded {len(rules):,} rules and {len(tape):,} tape cells.", markup=False)

    if args.initial_state is not None:
        initial_state = args.initial_state
    else:
        initial_state = ask_initial_state(distinct_states(rules), config["show_states"])

    machine = Machine(tape, initial_state)

    logger = None
    if config["log_runs"]:
        logger = JSONLogger(config["output_directory"], config["log_file_prefix"])

    def on_step(m):
        show_machine(m)
        if logger:
            logger.log_step(m)

    applied = machine.run(
        rules,
        max_steps=config["max_steps"],
        on_step=on_step,
        delay=config["step_delay"],
    )
    halted = machine.halted(rules)

    if logger:
        entry = logger.log_summary(rule_file, tape_file, initial_state, machine, applied, halted)
        if halted:
            logger.log_halting(entry, rules)
        else:
            logger.log_stopped(entry, rules)

    if args.verbose:
        outcome = "halted" if halted else "stopped at the step limit"
        console.print(f"[INFO] Machine {outcome} after {applied:,} steps.", markup=False)

    return machine

def build_config(args):
    try:
        config = load_config(resolve_config_path(args.config), verbose=args.verbose)
        if args.delay is not None:
            config["step_delay"] = args.delay
        if args.max_steps is not None:
            config["max_steps"] = args.max_steps
        if args.log:
            config["log_runs"] = True
        validate_config(config)
    except (OSError, ValueError, TypeError) as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
    return config

def main(argv=None):
    prog = sys.argv[0] if sys.argv and sys.argv[0] else "turing-machine"
    parser = build_parser(prog)
    args = parser.parse_intermixed_args(argv)

    if len(args.files) > 2:
        parser.error(f"unexpected extra arguments: {' '.join(args.files[2:])}")

    try:
        if len(args.files) < 2:
            raise ArgsError(usage(prog))
        run(args, build_config(args))
    except ArgsError as e:
        err_console.print("[red]Error: input file is not provided[/red]")
        err_console.print(e.usage, markup=False, soft_wrap=True)
        return 1
    except TuringError as e:
        err_console.print(f"Error: {e}", style="red", markup=False, soft_wrap=True)
        return 1

    return 0

if __name__ == "__main__":
    sys.exit(main())
