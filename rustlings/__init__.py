"""Exercise runner: verify, watch, run, reset, hint and list compiler exercises."""

__version__ = "5.4.1"