"""Season-over-season statistics for iNaturalist observation exports."""

__version__ = "0.1.0"
