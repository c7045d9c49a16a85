"""
Destinations for rendered reports.
"""

from abc import ABC, abstractmethod
import io
import sys
from typing import IO


class Printer(ABC):
    """
    An object that accepts chunks of report text. When the text actually arrives at its
    destination is up to the Printer; callers invoke flush() once they are done.
    """
    @abstractmethod
    def print(self, buffer: str) -> None:
        ...


    @abstractmethod
    def flush(self) -> None:
        ...


class BufferingPrinter(Printer):
    """
    Collects the report until flush, then hands it to _write in one piece.
    """
    def __init__(self) -> None:
        self._buffer : list[str] = []


    @staticmethod
    def to_destination(dest: str | None) -> 'BufferingPrinter':
        """
        dest: name of the file to write to, or None for stdout
        """
        if dest and isinstance(dest, str):
            return FilePrinter(dest)
        return StreamPrinter(sys.stdout)


    def print(self, buffer: str) -> None:
        self._buffer.append(buffer)


    def flush(self) -> None:
        content = ''.join(self._buffer)
        self._buffer = []
        self._write(content)


    @abstractmethod
    def _write(self, content: str) -> None:
        ...


class StreamPrinter(BufferingPrinter):
    """
    Writes the report to an already-open text stream upon flush.
    """
    def __init__(self, fd: IO[str]):
        super().__init__()
        self._fd = fd


    def _write(self, content: str) -> None:
        self._fd.write(content)
        self._fd.flush()


class FilePrinter(BufferingPrinter):
    """
    Writes the report to a file upon flush. The file is not touched before then.
    """
    def __init__(self, filename: str):
        super().__init__()
        self.filename = filename


    def _write(self, content: str) -> None:
        with open(self.filename, 'w', encoding='utf8') as out:
            out.write(content)


class StringPrinter(Printer):
    """
    Collects the report in memory; this is for testing and for callers that want the text.
    """
    def __init__(self) -> None:
        self._string_io = io.StringIO()
        self.n_flushes = 0


    def print(self, buffer: str) -> None:
        self._string_io.write(buffer)


    def flush(self) -> None:
        self.n_flushes += 1


    def as_string(self) -> str:
        return self._string_io.getvalue()


class NullPrinter(Printer):
    def print(self, buffer: str) -> None:
        pass


    def flush(self) -> None:
        pass
