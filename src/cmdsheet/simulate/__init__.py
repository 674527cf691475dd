"""Random data generators for the ping, traceroute and process-table views.

These fabricate plausible-looking rows for display only. They are separate
from command synthesis and share nothing with it.
"""

from cmdsheet.simulate.network import PingSimulator, TracerouteSimulator
from cmdsheet.simulate.processes import ProcessTable
from cmdsheet.simulate.ticker import Ticker

__all__ = ["PingSimulator", "ProcessTable", "Ticker", "TracerouteSimulator"]
