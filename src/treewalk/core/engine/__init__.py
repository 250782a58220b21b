from .execution_engine import ExecutionEngine
from .timer import AutoPlayTimer, Cancellable, Scheduler

__all__ = [
    "ExecutionEngine",
    "AutoPlayTimer",
    "Cancellable",
    "Scheduler",
]
