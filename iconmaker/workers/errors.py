"""Error types raised by the icon pipeline."""


class IconMakerError(Exception):
    """Base class for every error the pipeline raises."""


class ImageAllocationError(IconMakerError):
    """A target bitmap could not be created (bad size or out of memory)."""


class ImageEncodeError(IconMakerError):
    """A bitmap could not be serialized."""


class ConversionFailed(IconMakerError):
    """A conversion run stopped before producing a complete bundle."""


class ExternalToolFailure(ConversionFailed):
    """The icon packager did not produce its output file."""

    def __init__(self, message: str, output: str = "") -> None:
        super().__init__(message)
        self.output = output


class ConversionCancelled(ConversionFailed):
    """The run was stopped between catalog entries."""
