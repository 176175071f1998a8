"""Game-agnostic runtime primitives: scheduling, dispatch, events and logging."""

from salvo.runtime.dispatch import SerialDispatcher
from salvo.runtime.events import EventBus, Subscription
from salvo.runtime.scheduler import Scheduler

__all__ = ["EventBus", "Scheduler", "SerialDispatcher", "Subscription"]
