import json
import os
from datetime import datetime, timezone

class JSONLogger:
    def __init__(self, output_directory="logs/", log_file_prefix="turing_"):
        self.output_directory = output_directory
        self.log_file_prefix = log_file_prefix
        os.makedirs(self.output_directory, exist_ok=True)
        self.today = datetime.now(timezone.utc).strftime("%Y-%m-%d")
        self.current_log = self._get_log_filename()

    def _get_log_filename(self):
        filename = f"{self.log_file_prefix}{self.today}.jsonl"  # JSON lines format
        return os.path.join(self.output_directory, filename)

    def _log_to_file(self, filename, entries):
        path = os.path.join(self.output_directory, filename)
        with open(path, "a", encoding="utf-8") as f:
            for entry in entries:
                f.write(json.dumps(entry) + "\n")

    def log(self, entry: dict):
        """Log a single entry to the main run log."""
        with open(self.current_log, "a", encoding="utf-8") as f:
            f.write(json.dumps(entry) + "\n")

    def log_batch(self, entries: list):
        """Log a batch of entries to the main run log."""
        with open(self.current_log, "a", encoding="utf-8") as f:
            for entry in entries:
                f.write(json.dumps(entry) + "\n")

    def log_step(self, machine):
        """Log the machine configuration after a step."""
        self.log({"event": "step", **machine.snapshot()})

    def log_summary(self, rule_file, tape_file, initial_state, machine, applied, halted):
        """Log the outcome of a whole run (halted or cut off by max_steps)."""
        entry = {
            "event": "summary",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "rule_file": str(rule_file),
            "tape_file": str(tape_file),
            "initial_state": initial_state,
            "steps_applied": applied,
            "halted": halted,
            "final": machine.snapshot(),
        }
        self.log(entry)
        return entry

    def log_halting(self, entry: dict, rules: list):
        """Log the full rule program of a run that halted."""
        filename = f"halting_{self.today}.jsonl"
        self._log_to_file(filename, [{**entry, "rules": [str(rule) for rule in rules]}])

    def log_stopped(self, entry: dict, rules: list):
        """Log the full rule program of a run stopped by the step limit."""
        filename = f"stopped_{self.today}.jsonl"
        self._log_to_file(filename, [{**entry, "rules": [str(rule) for rule in rules]}])
