import sys
import traceback
from typing import Optional, TextIO

WARN_PREFIX = 'WARN: '
ERROR_PREFIX = 'ERROR: '


class BuildListener:
    """
    Append-only console of a build. Lines are written either to the info channel or to the error channel; warnings
    are info lines carrying the `WARN:` prefix.
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream or sys.stdout

    def info(self, message: str):
        self._println(message)

    def warn(self, message: str):
        self._println(WARN_PREFIX + message)

    def error(self, message: str):
        self._println(ERROR_PREFIX + message)

    def exception(self, message: str, exc: BaseException):
        """Writes the message to the error channel followed by the traceback of the exception."""
        self.error(message)
        traceback.print_exception(exc, file=self.stream)
        self.stream.flush()

    def _println(self, line):
        print(line, file=self.stream, flush=True)
