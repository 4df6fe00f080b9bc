"""
Validation functions for configuration values.
"""

from typing import Any, List, Optional

from .exceptions import ValidationError

# Run of placeholder characters that mkstemp-style templates must end with.
TEMPLATE_PLACEHOLDER = "XXXXXX"


def validate_positive_integer(
    value: Any,
    min_value: int = 1,
    max_value: Optional[int] = None,
    field_name: str = "value"
) -> int:
    """
    Validate that a value is a positive integer.

    Args:
        value: Value to validate
        min_value: Minimum allowed value (inclusive)
        max_value: Maximum allowed value (inclusive), None for no limit
        field_name: Name of the field being validated

    Returns:
        Validated integer value

    Raises:
        ValidationError: If validation fails
    """
    if isinstance(value, bool):
        raise ValidationError(
            f"{field_name} must be a valid integer, got {value}",
            field_name=field_name,
            value=value
        )
    try:
        int_value = int(value)
    except (ValueError, TypeError):
        raise ValidationError(
            f"{field_name} must be a valid integer, got {value}",
            field_name=field_name,
            value=value
        )
    if int_value < min_value:
        raise ValidationError(
            f"{field_name} must be >= {min_value}, got {int_value}",
            field_name=field_name,
            value=value
        )
    if max_value is not None and int_value > max_value:
        raise ValidationError(
            f"{field_name} must be <= {max_value}, got {int_value}",
            field_name=field_name,
            value=value
        )
    return int_value


def validate_positive_float(
    value: Any,
    min_value: float = 0.0,
    max_value: Optional[float] = None,
    field_name: str = "value"
) -> float:
    """
    Validate that a value is a positive float.

    Args:
        value: Value to validate
        min_value: Minimum allowed value (inclusive)
        max_value: Maximum allowed value (inclusive), None for no limit
        field_name: Name of the field being validated

    Returns:
        Validated float value

    Raises:
        ValidationError: If validation fails
    """
    if isinstance(value, bool):
        raise ValidationError(
            f"{field_name} must be a valid number, got {value}",
            field_name=field_name,
            value=value
        )
    try:
        float_value = float(value)
    except (ValueError, TypeError):
        raise ValidationError(
            f"{field_name} must be a valid number, got {value}",
            field_name=field_name,
            value=value
        )
    if float_value < min_value:
        raise ValidationError(
            f"{field_name} must be >= {min_value}, got {float_value}",
            field_name=field_name,
            value=value
        )
    if max_value is not None and float_value > max_value:
        raise ValidationError(
            f"{field_name} must be <= {max_value}, got {float_value}",
            field_name=field_name,
            value=value
        )
    return float_value


def validate_enum_choice(
    value: Any,
    choices: List[str],
    field_name: str = "value",
    case_sensitive: bool = True
) -> str:
    """
    Validate that a value is one of the allowed choices.

    Args:
        value: Value to validate
        choices: List of allowed choices
        field_name: Name of the field being validated
        case_sensitive: Whether the comparison should be case-sensitive

    Returns:
        The matching entry from ``choices``

    Raises:
        ValidationError: If value is not in choices
    """
    str_value = str(value)

    for choice in choices:
        if case_sensitive and str_value == choice:
            return choice
        if not case_sensitive and str_value.lower() == choice.lower():
            return choice

    raise ValidationError(
        f"{field_name} must be one of {choices}, got {value}",
        field_name=field_name,
        value=value
    )


def validate_name_template(value: Any, field_name: str = "name_template") -> str:
    """
    Validate a scratch-file name template such as ``tmp.tease.XXXXXX``.

    The template must be a plain file name (no directory part) containing
    the placeholder run ``XXXXXX`` that marks where the unique part goes.

    Raises:
        ValidationError: If the template is unusable
    """
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(
            f"{field_name} must be a non-empty string",
            field_name=field_name,
            value=value
        )
    if "/" in value or "\\" in value:
        raise ValidationError(
            f"{field_name} must be a file name without a directory, got {value!r}",
            field_name=field_name,
            value=value
        )
    if TEMPLATE_PLACEHOLDER not in value:
        raise ValidationError(
            f"{field_name} must contain '{TEMPLATE_PLACEHOLDER}', got {value!r}",
            field_name=field_name,
            value=value
        )
    return value


def split_name_template(template: str):
    """Split a name template into the (prefix, suffix) around its last placeholder run."""
    index = template.rfind(TEMPLATE_PLACEHOLDER)
    return template[:index], template[index + len(TEMPLATE_PLACEHOLDER):]
