"""Convert OpenAPI/Swagger documents into AsciiDoc or Markdown."""

from .utils.env import load_env

# MARKUPGEN_* constants in utils.config are read at import time.
load_env()

__version__ = "0.1.0"
