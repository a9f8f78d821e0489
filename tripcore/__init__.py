"""Trip planning data manager: itineraries, pricing and booking."""

__version__ = "0.1.0"
