"""Errors raised by the slide layout core and the generator around it."""


class SlideGenError(Exception):
    """Base class for all textdeck errors."""


class InvalidInputError(SlideGenError, ValueError):
    """Neither body text nor a title was supplied, so there is nothing to lay out."""


class ImageNotReadyError(SlideGenError):
    """An image is attached but its dimensions are not known yet.

    The caller is expected to finish loading the image and retry.
    """

    def __init__(self, role: str):
        super().__init__(f"{role} image is not ready; wait for it to finish loading")
        self.role = role


class MeasurementUnavailableError(SlideGenError):
    """No text measurer was supplied, so text cannot be wrapped or positioned."""
