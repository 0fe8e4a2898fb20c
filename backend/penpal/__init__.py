"""Celebrity Penpal - handwritten letter ordering backend."""
__version__ = "1.0.0"
