#!/usr/bin/env python3
"""
Exception types for the Orrery Simulator.

All errors are raised while the system is being wired together at startup.
Once the render loop is running, per-frame updates do not raise.
"""


class OrreryError(Exception):
    """Base class for all orrery errors."""


class ConfigurationError(OrreryError):
    """The body table, a preset file, or the hierarchy built from it is invalid."""


class WiringError(ConfigurationError):
    """A body in the hierarchy has no usable transform node."""

    def __init__(self, body: str, reason: str = "no transform node"):
        self.body = body
        super().__init__(f"Body '{body}': {reason}")
