"""docmesh: Markdown chunking, hybrid result fusion and document link graphs."""

__version__ = "0.1.0"
