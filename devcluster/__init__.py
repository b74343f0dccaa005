"""Lifecycle manager for the local kind development cluster."""

__version__ = "0.1.0"
