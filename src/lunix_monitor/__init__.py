"""Live terminal monitor for Lunix:TNG sensor device nodes."""

__version__ = "0.1.0"
