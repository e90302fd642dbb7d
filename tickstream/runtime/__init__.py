"""Cooperative runtime: mailbox, event stream, task pool and driver."""

from tickstream.runtime.combinators import Selected, join_all, ready, select
from tickstream.runtime.config import RuntimeConfig, load_runtime_config
from tickstream.runtime.context import TaskContext
from tickstream.runtime.driver import Driver, DriverStats
from tickstream.runtime.logging import configure_tickstream_logging, setup_tickstream_logging
from tickstream.runtime.poll import PENDING, CoroutinePoll, Pollable, Waker
from tickstream.runtime.scheduler import Scheduler
from tickstream.runtime.stream import EventStream, Mailbox
from tickstream.runtime.tasks import TaskHandle, TaskPool
from tickstream.runtime.time import FrameClock, TimeContext
from tickstream.runtime.timers import Sleep, Timers

__all__ = [
    "PENDING",
    "CoroutinePoll",
    "Driver",
    "DriverStats",
    "EventStream",
    "FrameClock",
    "Mailbox",
    "Pollable",
    "RuntimeConfig",
    "Scheduler",
    "Selected",
    "Sleep",
    "TaskContext",
    "TaskHandle",
    "TaskPool",
    "TimeContext",
    "Timers",
    "Waker",
    "configure_tickstream_logging",
    "join_all",
    "load_runtime_config",
    "ready",
    "select",
    "setup_tickstream_logging",
]
