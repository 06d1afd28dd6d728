"""Logging utilities for the access rights check."""

from .logger import ExtraFormatter, configure_logging

__all__ = ["ExtraFormatter", "configure_logging"]
