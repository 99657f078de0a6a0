def parse_int(value, field_name: str, default: int | None = None) -> int:
    """
    Form / JSON value to int. Blank falls back to default.
    Fractions, infinities and NaN are rejected, not truncated.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        if default is None:
            raise ValueError(f"{field_name} is required")
        return default

    if isinstance(value, bool):
        raise ValueError(f"{field_name} must be a whole number")

    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"{field_name} must be a whole number")

    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        raise ValueError(f"{field_name} must be a whole number")
