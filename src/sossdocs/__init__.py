"""sossdocs - documentation and validation for SoSS+ RO-Crate profiles."""

__version__ = "0.1.0"
