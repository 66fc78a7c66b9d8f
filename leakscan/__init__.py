"""Rules, allowlists, configuration and rule-writing helpers for finding secrets."""

__version__ = "0.1.0"