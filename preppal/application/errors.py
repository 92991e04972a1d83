class ValidationError(ValueError):
    """Required-field or input-shape check failed before any remote call."""


class DuplicateDestinationError(ValidationError):
    pass


class AttachmentRejected(ValidationError):
    pass
