import logging
from typing import Optional, Sequence

from .config import TotpQrConfig, is_valid_color
from .exceptions import InvalidConfiguration
from .otp import decode_secret
from .qr import QRCodeMatrixProvider, QRMatrixProvider
from .utils import build_uri

logger = logging.getLogger(__name__)


def module_size_for(side: int, min_dimension: int) -> int:
    # round up, so the canvas is never smaller than min_dimension
    return max(1, -(-min_dimension // side))


def render_svg(
    matrix: Sequence[Sequence[bool]],
    dark_color: str,
    light_color: str,
    min_dimension: int,
    quiet_zone: int = 0,
) -> str:
    """
    Serializes a QR module matrix as a standalone SVG document.

    The canvas is ``module_size * side`` pixels square, where ``side``
    counts the quiet zone and ``module_size`` is the smallest whole number
    of pixels that reaches ``min_dimension``. A light background rect
    covers the canvas and every dark module gets its own rect, in row-major
    order, so equal inputs give byte-identical output.

    :param matrix: square grid, truthy cells are dark
    :param quiet_zone: light modules added on every side
    """
    size = len(matrix)
    if size == 0 or any(len(row) != size for row in matrix):
        raise InvalidConfiguration("QR matrix must be square and non-empty")
    for color in (dark_color, light_color):
        if not is_valid_color(color):
            raise InvalidConfiguration("{!r} is not a valid color".format(color))
    if isinstance(min_dimension, bool) or not isinstance(min_dimension, int) or min_dimension <= 0:
        raise InvalidConfiguration("min_dimension must be a positive integer")
    if isinstance(quiet_zone, bool) or not isinstance(quiet_zone, int) or quiet_zone < 0:
        raise InvalidConfiguration("quiet_zone must be a non-negative integer")

    side = size + 2 * quiet_zone
    scale = module_size_for(side, min_dimension)
    dim = scale * side
    logger.debug("rendering %dx%d modules at %dpx into a %dpx canvas", size, size, scale, dim)

    parts = [
        '<?xml version="1.0" standalone="yes"?>',
        f'<svg xmlns="http://www.w3.org/2000/svg" version="1.1" width="{dim}" height="{dim}"',
        f' viewBox="0 0 {dim} {dim}" shape-rendering="crispEdges">',
        f'<rect x="0" y="0" width="{dim}" height="{dim}" fill="{light_color}"/>',
    ]
    for y, row in enumerate(matrix):
        for x, dark in enumerate(row):
            if dark:
                parts.append(
                    f'<rect x="{(x + quiet_zone) * scale}" y="{(y + quiet_zone) * scale}"'
                    f' width="{scale}" height="{scale}" fill="{dark_color}"/>'
                )
    parts.append("</svg>")
    return "".join(parts)


def totp_qr_svg(secret_base32: str, config: TotpQrConfig, provider: Optional[QRMatrixProvider] = None) -> str:
    """
    Renders the provisioning QR code for a TOTP secret as SVG.

    The encoded URI always states ``algorithm``, ``digits`` and ``period``
    so authenticator apps do not have to guess.

    :param secret_base32: secret in base32 format
    :param config: labels, colors, size and QR parameters
    :param provider: source of module matrices, ``qrcode`` backed by default
    :raises InvalidSecretEncoding: if the secret is not valid base32
    :raises PayloadTooLarge: if the URI does not fit ``config.version``
    """
    decode_secret(secret_base32)
    uri = build_uri(
        secret_base32,
        config.account_name,
        issuer=config.issuer or None,
        algorithm="SHA1",
        digits=config.digits,
        period=config.period,
    )
    if provider is None:
        provider = QRCodeMatrixProvider()
    matrix = provider.matrix(uri, config.version, config.ec_level)
    return render_svg(matrix, config.dark_color, config.light_color, config.min_dimension, config.quiet_zone)
