"""Example configuration helpers for ``lib_service_config``."""

from .generate import ExampleSpec, generate_examples

__all__ = [
    "ExampleSpec",
    "generate_examples",
]
