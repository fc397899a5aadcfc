"""Exception hierarchy for Imaginator core components."""


class ImaginatorError(Exception):
    """Base class for all Imaginator errors."""

    pass


class GenerationError(ImaginatorError):
    """The image-generation API failed or could not be reached.

    The message is intended to be displayed directly to the user.
    """

    pass


class ImageNotReadyError(ImaginatorError):
    """An editor was requested for a card whose image has not been bound yet."""

    pass
