"""rustmod - scaffold Rust modules and keep parent declarations in sync."""

__version__ = "0.1.0"
