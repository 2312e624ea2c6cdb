"""Read solar production data from an APsystems ECU-R gateway."""

__version__ = "0.1.0"
