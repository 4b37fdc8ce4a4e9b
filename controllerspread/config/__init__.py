"""Configuration loading and validation for the ControllerSpreadFilter."""

from controllerspread.config.loader import SpreadFilterArgs, load_args
from controllerspread.config.validator import validate_args

__all__ = ["SpreadFilterArgs", "load_args", "validate_args"]
