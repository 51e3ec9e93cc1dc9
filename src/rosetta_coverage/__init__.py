"""Coverage report between a local Rosetta Code repository and the wiki."""

__version__ = "0.1.0"
