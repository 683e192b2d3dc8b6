"""Hot topic snapshot crawler and deduplicating archiver."""

__version__ = "0.1.0"
