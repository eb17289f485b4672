import base64
import secrets

from .config import TotpQrConfig as TotpQrConfig
from .exceptions import InvalidConfiguration as InvalidConfiguration
from .exceptions import InvalidSecretEncoding as InvalidSecretEncoding
from .exceptions import OTPError as OTPError
from .exceptions import PayloadTooLarge as PayloadTooLarge
from .hotp import HOTP as HOTP
from .hotp import hotp_raw as hotp_raw
from .otp import OTP as OTP
from .qr import EcLevel as EcLevel
from .qr import QRCodeMatrixProvider as QRCodeMatrixProvider
from .qr import QRMatrixProvider as QRMatrixProvider
from .svg import render_svg as render_svg
from .svg import totp_qr_svg as totp_qr_svg
from .totp import TOTP as TOTP
from .totp import totp_raw as totp_raw
from .totp import totp_raw_now as totp_raw_now
from .utils import build_uri as build_uri

DEFAULT_SECRET_BYTES = 20


def generate_totp_secret(byte_length: int = DEFAULT_SECRET_BYTES) -> str:
    """
    Generates a random secret key for TOTP in base32 format.

    :param byte_length: number of random bytes behind the secret, 20 (160
        bits) matches the SHA1 block size recommended by RFC 4226
    :returns: unpadded, upper case base32 text
    """
    # Note: the otpauth scheme DOES NOT use base32 padding for secret lengths not divisible by 5 bytes.
    if isinstance(byte_length, bool) or not isinstance(byte_length, int) or byte_length <= 0:
        raise InvalidConfiguration("byte_length must be a positive integer")

    return base64.b32encode(secrets.token_bytes(byte_length)).decode("ascii").rstrip("=")
