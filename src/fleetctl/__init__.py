"""fleetctl: start and stop cluster processes on one host or the whole fleet."""

__version__ = "0.1.0"
