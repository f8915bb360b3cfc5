"""
Settings Schema.

This module provides typed field definitions for the podmerge settings file.

Key features:
- Type-checked fields with defaults
- Range constraints for numbers, length constraints for strings
- Choice constraints
- Defaults filled in for fields missing from the file
"""

from dataclasses import dataclass
from typing import Any


class SchemaError(Exception):
    """Base exception for schema-related errors."""

    pass


class ValidationError(SchemaError):
    """Raised when value validation fails."""

    pass


@dataclass
class ConfigField:
    """
    A settings field with type and constraints.

    Attributes:
        type_: The expected type of the field value
        default: Default value for the field
        description: Human-readable description (written as a TOML comment)
        min: Minimum value (numbers) or minimum length (strings)
        max: Maximum value (numbers) or maximum length (strings)
        choices: List of allowed values (optional)
    """

    type_: type
    default: Any
    description: str = ""
    min: Any = None
    max: Any = None
    choices: list[Any] | None = None

    def __post_init__(self):
        """Validate the field definition itself."""
        if not isinstance(self.default, self.type_):
            raise SchemaError(
                f"Default value {self.default!r} does not match type {self.type_.__name__}"
            )

        if (self.min is not None or self.max is not None) and self.type_ not in (int, str):
            raise SchemaError(
                f"min/max constraints only supported for int and str. Got {self.type_.__name__}"
            )

        if self.choices is not None and self.default not in self.choices:
            raise SchemaError(f"Default value {self.default!r} not in choices {self.choices}")

    def validate(self, value: Any) -> None:
        """
        Validate a value against this field's constraints.

        Raises:
            ValidationError: If validation fails
        """
        # bool is a subclass of int; keep them apart
        if not isinstance(value, self.type_) or (
            self.type_ is int and isinstance(value, bool)
        ):
            raise ValidationError(
                f"Expected type {self.type_.__name__}, got {type(value).__name__}"
            )

        if self.choices is not None and value not in self.choices:
            raise ValidationError(f"Value {value!r} not in allowed choices {self.choices}")

        measured = len(value) if self.type_ is str else value
        label = "Length" if self.type_ is str else "Value"
        if self.min is not None and measured < self.min:
            raise ValidationError(f"{label} {measured} is less than minimum {self.min}")
        if self.max is not None and measured > self.max:
            raise ValidationError(f"{label} {measured} is greater than maximum {self.max}")


def validate_settings(data: dict[str, Any], schema: dict[str, ConfigField]) -> dict[str, Any]:
    """
    Validate settings against a schema, filling in defaults.

    Args:
        data: Settings read from file
        schema: Schema dictionary (field_name -> ConfigField)

    Returns:
        Complete settings dictionary

    Raises:
        ValidationError: On unknown fields or invalid values
    """
    for key in data:
        if key not in schema:
            raise ValidationError(f"Unknown settings field: {key}")

    settings = {}
    for field_name, field in schema.items():
        value = data.get(field_name, field.default)
        try:
            field.validate(value)
        except ValidationError as e:
            raise ValidationError(f"Field '{field_name}': {e}") from e
        settings[field_name] = value

    return settings
