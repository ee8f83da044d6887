"""
Debug instrumentation - boot profiling and service resolution tracking.
"""

from bootkernel.debug.debuggable import Debuggable
from bootkernel.debug.instrumented import InstrumentedLocator
from bootkernel.debug.profiler import Profiler
from bootkernel.debug.resolution import ResolutionLedger, ResolutionRecord

__all__ = [
    "Debuggable",
    "InstrumentedLocator",
    "Profiler",
    "ResolutionLedger",
    "ResolutionRecord",
]
