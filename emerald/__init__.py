"""A small 2D application framework: events, layers, cameras, batched quads, scenes and profiling."""

__version__ = "0.1.0"