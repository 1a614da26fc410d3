"""Flask JSON host exposing the graph YAML autocomplete engine."""
from .web import app, main

__all__ = ["app", "main"]
