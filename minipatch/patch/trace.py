import logging
from typing import Protocol


class Tracer(Protocol):
    def trace(self, message: str, *args: object) -> None:
        ...


class NullTracer:
    def trace(self, message: str, *args: object) -> None:
        return None


class LogTracer:
    """Forwards match traces to a logger at DEBUG level."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def trace(self, message: str, *args: object) -> None:
        self.logger.debug(message, *args)


class RecordingTracer:
    """Keeps formatted trace messages in memory."""

    def __init__(self):
        self.messages: list[str] = []

    def trace(self, message: str, *args: object) -> None:
        self.messages.append(message % args if args else message)


NULL_TRACER = NullTracer()
