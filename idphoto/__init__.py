"""ID photo generation service backed by Gemini image editing."""

__version__ = "0.1.0"
