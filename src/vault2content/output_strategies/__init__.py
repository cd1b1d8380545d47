"""Rendering of copy records for humans and machines."""

from .base_strategy import OutputStrategy
from .json_strategy import JSONOutputStrategy
from .text_strategy import TextOutputStrategy

__all__ = ["JSONOutputStrategy", "OutputStrategy", "TextOutputStrategy"]
