"""Run build steps through a configured run-as launcher."""

__version__ = "0.3.1"
