"""IBS Tracker - log symptoms, intake and stress, and chart daily trends."""

__version__ = "0.1.0"
