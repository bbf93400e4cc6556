"""Exceptions raised by keyviewer.

Malformed keymap DSL never raises; these cover the boundaries where input
cannot be decoded at all or a stored value is missing.
"""


class KeyviewerError(Exception):
    """Base class for all keyviewer errors."""


class DecodeError(KeyviewerError):
    """Input text or JSON could not be decoded into a model."""


class NotFoundError(KeyviewerError):
    """A stored keymap or layout does not exist."""


class KeymapValidationError(KeyviewerError):
    """An imported keymap is structurally valid JSON but unusable."""


class InvalidLayerError(KeyviewerError):
    """A layer index does not refer to an existing layer."""


class InvalidNameError(KeyviewerError):
    """A name cannot be used as a stored file name."""
