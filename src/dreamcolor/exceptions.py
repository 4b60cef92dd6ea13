"""Centralized exception hierarchy for DreamColor.

Usage:
    from dreamcolor.exceptions import ImageGenerationError

    raise ImageGenerationError("No image generated")
"""


class DreamColorError(Exception):
    """Base exception for all DreamColor errors."""
    pass


class ConfigurationError(DreamColorError):
    """Raised when configuration is invalid.

    Examples:
        - Non-numeric page count
        - Unknown model identifier
    """
    pass


class GenerationError(DreamColorError):
    """Raised when a call to the generative API fails."""
    pass


class ImageGenerationError(GenerationError):
    """Raised when no image could be produced for a scene.

    Examples:
        - Provider returned an empty generated_images list
        - Transport error during generate_images
    """
    pass


class InvalidTransitionError(DreamColorError):
    """Raised when a page or session is moved to a state it cannot reach."""
    pass


class ExportError(DreamColorError):
    """Raised when the PDF document cannot be built."""
    pass
