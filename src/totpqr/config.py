import re
from dataclasses import dataclass
from typing import Optional

from .exceptions import InvalidConfiguration
from .otp import DEFAULT_DIGITS, validate_digits
from .qr import MAX_VERSION, MIN_VERSION, EcLevel
from .totp import DEFAULT_INTERVAL

DEFAULT_MIN_DIMENSION = 200
# ISO/IEC 18004 minimum margin, in modules
DEFAULT_QUIET_ZONE = 4

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")
# CSS level 1 keywords, understood by every SVG renderer
_NAMED_COLORS = frozenset(
    [
        "aqua",
        "black",
        "blue",
        "fuchsia",
        "gray",
        "green",
        "lime",
        "maroon",
        "navy",
        "olive",
        "purple",
        "red",
        "silver",
        "teal",
        "white",
        "yellow",
        "transparent",
    ]
)


def is_valid_color(color: str) -> bool:
    """
    True for ``#rgb``, ``#rgba``, ``#rrggbb``, ``#rrggbbaa`` or a basic
    color keyword. Anything else could break out of the SVG attribute.
    """
    if not isinstance(color, str):
        return False
    return bool(_HEX_COLOR.match(color)) or color.lower() in _NAMED_COLORS


def _positive_int(value, field: str, minimum: int = 1) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
        raise InvalidConfiguration("{} must be an integer >= {}".format(field, minimum))
    return value


@dataclass(frozen=True)
class TotpQrConfig:
    """
    Everything needed to turn a secret into a provisioning QR image.

    Validated on construction; an instance that exists is renderable,
    barring a payload that does not fit ``version``.
    """

    account_name: str
    issuer: str
    dark_color: str = "#000000"
    light_color: str = "#ffffff"
    min_dimension: int = DEFAULT_MIN_DIMENSION
    version: Optional[int] = None
    ec_level: EcLevel = EcLevel.MEDIUM
    digits: int = DEFAULT_DIGITS
    period: int = DEFAULT_INTERVAL
    quiet_zone: int = DEFAULT_QUIET_ZONE

    def __post_init__(self) -> None:
        if not isinstance(self.account_name, str) or not self.account_name:
            raise InvalidConfiguration("account_name must be a non-empty string")
        if not isinstance(self.issuer, str):
            raise InvalidConfiguration("issuer must be a string")
        for field in ("account_name", "issuer"):
            if ":" in getattr(self, field):
                raise InvalidConfiguration("{} must not contain ':'".format(field))
        for field in ("dark_color", "light_color"):
            if not is_valid_color(getattr(self, field)):
                raise InvalidConfiguration("{} is not a valid color: {!r}".format(field, getattr(self, field)))
        _positive_int(self.min_dimension, "min_dimension")
        if self.version is not None:
            _positive_int(self.version, "version", MIN_VERSION)
            if self.version > MAX_VERSION:
                raise InvalidConfiguration("version must be between {} and {}".format(MIN_VERSION, MAX_VERSION))
        if not isinstance(self.ec_level, EcLevel):
            raise InvalidConfiguration("ec_level must be an EcLevel")
        validate_digits(self.digits)
        _positive_int(self.period, "period")
        _positive_int(self.quiet_zone, "quiet_zone", 0)
