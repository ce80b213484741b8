import sys
from typing import Optional, TextIO


class ParseError(Exception):
    """Raised while turning tokens into statements."""
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def report(self, stream: Optional[TextIO] = None):
        print(f"Error: {self.message}", file=stream or sys.stderr)


class LoxRuntimeError(Exception):
    """Raised while evaluating expressions or executing statements."""
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def report(self, stream: Optional[TextIO] = None):
        print(f"RuntimeError: {self.message}", file=stream or sys.stderr)
