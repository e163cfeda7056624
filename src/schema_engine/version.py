"""Package version, stamped into committed documents."""

__version__ = "0.1.0"
