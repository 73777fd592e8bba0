"""Event-sourced dynamic neural networks and adaptive memory, with file-backed event logs."""

__version__ = "0.1.0"