"""Month-view calendar scheduling engine for multi-day tasks."""

__version__ = "0.1.0"
