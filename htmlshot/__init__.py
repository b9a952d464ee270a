"""htmlshot - render HTML/CSS markup to PNG/JPEG screenshots over HTTP."""

__version__ = "0.1.0"
