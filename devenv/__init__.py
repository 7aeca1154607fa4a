"""devenv — interactive installer for a local developer toolchain."""

__version__ = "0.1.0"
