"""Low-level MessagePack markers, readers and writers for each wire format."""

__version__ = "0.1.0"