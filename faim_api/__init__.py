"""FAIM forecast API: validated, shape-normalized access to FAIM forecasting models."""

__version__ = "1.0.0"
