"""Variantgen package root."""

from variantgen.exceptions import GenerationError
from variantgen.synthesis.emission import render_declarations, render_module
from variantgen.synthesis.pipeline import generate

__all__ = [
    "__version__",
    "GenerationError",
    "generate",
    "render_declarations",
    "render_module",
]

__version__ = "0.1.0"
