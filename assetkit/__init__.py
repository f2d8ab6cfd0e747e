"""Sources, loaders and hot-reloading building blocks for assets addressed by dotted ids."""

__version__ = "0.1.0"