"""roadraster: растровая карта проезжей части и запросы к ней."""

__version__ = "0.1.0"
