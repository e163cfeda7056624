"""Document validation and sanitization."""

from .sanitize import Sanitizer
from .validator import NodeValidationResult, ValidationResult, Validator

__all__ = ["Sanitizer", "NodeValidationResult", "ValidationResult", "Validator"]
