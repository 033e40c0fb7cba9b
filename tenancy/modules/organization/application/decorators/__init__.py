from .validation import validate_input

__all__ = ["validate_input"]
