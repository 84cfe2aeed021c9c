"""Core services: paths, config I/O, theme and the scan engine."""
