"""ChronoNotes: notes on a fuzzy-dated timeline."""

__version__ = "0.1.0"
