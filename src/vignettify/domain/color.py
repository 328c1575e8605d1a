"""RGB colour type and parsing helpers."""

from PIL import ImageColor

from vignettify.exceptions import InvalidConfigurationError

RGB = tuple[int, int, int]


def parse_color(value: str) -> RGB:
    """Parse a colour given on the command line.

    Accepts comma-separated channels ("20,20,240") as well as anything
    Pillow understands ("#1414f0", "navy", "rgb(20, 20, 240)").

    Args:
        value: Colour specification

    Returns:
        (r, g, b) triple with channels in [0, 255]

    Raises:
        InvalidConfigurationError: If the value is not a colour
    """
    text = value.strip()

    if "," in text and not text.lower().startswith(("rgb", "hs")):
        parts = [p.strip() for p in text.split(",")]
        if len(parts) != 3:
            raise InvalidConfigurationError(
                "border_color", f"expected three channels, got {len(parts)}"
            )
        try:
            channels = tuple(int(p) for p in parts)
        except ValueError as e:
            raise InvalidConfigurationError("border_color", f"not a number in '{value}'") from e
        if any(c < 0 or c > 255 for c in channels):
            raise InvalidConfigurationError("border_color", "channels must be within 0-255")
        return channels  # type: ignore[return-value]

    try:
        rgb = ImageColor.getrgb(text)
    except ValueError as e:
        raise InvalidConfigurationError("border_color", f"unknown colour '{value}'") from e

    # Alpha, if given, is ignored
    return (rgb[0], rgb[1], rgb[2])
