class OTPError(ValueError):
    """
    Base class for errors raised by totpqr.

    Subclasses ValueError so callers catching the builtin keep working.
    """


class InvalidSecretEncoding(OTPError):
    """The secret is not valid base32, or decodes to nothing."""


class InvalidConfiguration(OTPError):
    """A caller-supplied parameter is out of its supported range."""


class PayloadTooLarge(OTPError):
    """The provisioning URI does not fit the chosen QR version and EC level."""
