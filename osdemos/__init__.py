"""Runnable demonstrations of processes, scheduling, threads, synchronisation, persistence and networking."""

__version__ = "0.1.0"