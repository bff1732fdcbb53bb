"""Declarative UX/UI design processes over CLI AI agents."""

__version__ = "0.1.0"
