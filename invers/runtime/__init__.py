"""Single-threaded timer loop."""

from invers.runtime.loop import CooperativeLoop, PeriodicTimer

__all__ = ["CooperativeLoop", "PeriodicTimer"]
