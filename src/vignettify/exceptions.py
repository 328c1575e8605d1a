"""Exception hierarchy for Vignettify."""


class VignettizerError(Exception):
    """Base exception for all Vignettify errors."""

    pass


class ConfigurationError(VignettizerError):
    """Errors related to vignette configuration."""

    pass


class InvalidConfigurationError(ConfigurationError):
    """A configuration value cannot produce a valid vignette."""

    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid configuration for '{field}': {reason}")


class ImageError(VignettizerError):
    """Errors related to image loading or saving."""

    pass


class ImageLoadError(ImageError):
    """Error loading an image file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load image '{path}': {reason}")


class ImageSaveError(ImageError):
    """Error saving an image file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save image '{path}': {reason}")


class UnsupportedImageFormatError(ImageError):
    """Unsupported pixel format or file type."""

    def __init__(self, source: str, details: str) -> None:
        self.source = source
        self.details = details
        super().__init__(f"Unsupported image format '{source}': {details}")


class ProcessingError(VignettizerError):
    """Error compositing part of an image."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Processing failed: {reason}")

