"""Run coordination: state machine, dispatch and sinks."""
from .coordinator import RawResult, RunCoordinator, Sink, State
from .dispatch import ExecutionBoundary, LocalBoundary, dispatch
from .sink import MemorySink, StreamSink

__all__ = [
    "ExecutionBoundary",
    "LocalBoundary",
    "MemorySink",
    "RawResult",
    "RunCoordinator",
    "Sink",
    "State",
    "StreamSink",
    "dispatch",
]
