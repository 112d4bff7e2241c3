from .generator import GeneratorConfig, generate, generate_points
from .parser import ParseResult, parse, parse_file, parse_line
from .validation import validate_points

__all__ = [
    "GeneratorConfig",
    "generate",
    "generate_points",
    "ParseResult",
    "parse",
    "parse_file",
    "parse_line",
    "validate_points",
]
