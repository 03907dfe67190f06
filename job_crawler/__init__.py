"""Job deadline crawler: scan a site for job posts with upcoming deadlines."""

__version__ = "0.1.0"
