"""Core scratch-note logic, configuration, and console helpers."""
