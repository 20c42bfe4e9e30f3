class TuringError(Exception):
    """Base class for every fatal error raised by the simulator."""


class ParseError(TuringError):
    def __init__(self, path, line_number):
        self.path = path
        self.line_number = line_number
        super().__init__(f"{path}:{line_number}: A single turd is expected to have 5 tokens")


class TransformationError(TuringError):
    def __init__(self, token):
        self.token = token
        super().__init__(f"{token} is not a valid step. Expected 'L' or 'R'")


class ArgsError(TuringError):
    def __init__(self, usage):
        self.usage = usage
        super().__init__(usage)


class IoError(TuringError):
    pass


class TapeError(TuringError):
    pass


class ConfigError(TuringError):
    pass
