import base64
import binascii
import hashlib
import hmac
import struct
from typing import Any, Optional

from .exceptions import InvalidConfiguration, InvalidSecretEncoding

DEFAULT_DIGITS = 6
MIN_DIGITS = 1
# the truncated value is 31 bits, so 10 digits would always start with 0-2
MAX_DIGITS = 9
MAX_COUNTER = 2**64 - 1


def validate_digits(digits: int) -> int:
    if not isinstance(digits, int) or isinstance(digits, bool):
        raise InvalidConfiguration("digits must be an integer")
    if not MIN_DIGITS <= digits <= MAX_DIGITS:
        raise InvalidConfiguration("digits must be between {} and {}".format(MIN_DIGITS, MAX_DIGITS))
    return digits


def decode_secret(secret: str) -> bytes:
    """
    Decodes a base32 secret into raw key bytes.

    Lower case and missing ``=`` padding are accepted, the otpauth scheme
    does not pad secrets whose length is not a multiple of 8.

    :raises InvalidSecretEncoding: on characters outside the RFC 4648
        alphabet, an impossible length, or an empty result
    """
    if not isinstance(secret, str):
        raise InvalidSecretEncoding("secret must be a base32 string")
    missing_padding = len(secret) % 8
    if missing_padding != 0:
        secret += "=" * (8 - missing_padding)
    try:
        key = base64.b32decode(secret, casefold=True)
    except binascii.Error as e:
        raise InvalidSecretEncoding("Invalid base32 secret") from e
    if not key:
        raise InvalidSecretEncoding("secret must not be empty")
    return key


class OTP(object):
    """
    Base class for OTP handlers.
    """

    def __init__(
        self,
        s: str,
        digits: int = DEFAULT_DIGITS,
        digest: Any = None,
        name: Optional[str] = None,
        issuer: Optional[str] = None,
    ) -> None:
        self.digits = validate_digits(digits)
        if digest is None:
            digest = hashlib.sha1
        elif digest in [hashlib.md5, hashlib.shake_128]:
            raise InvalidConfiguration(
                "selected digest function must generate digest size greater than or equals to 18 bytes"
            )
        self.digest = digest
        self.secret = s
        self.name = name or "Secret"
        self.issuer = issuer

    def generate_code(self, input: int) -> int:
        """
        Computes the RFC 4226 value for one counter, before zero padding.

        :param input: the HMAC counter value to use as the OTP input.
            Usually either the counter, or the computed integer based on the Unix timestamp
        :returns: an integer in ``[0, 10**digits)``
        """
        if isinstance(input, bool) or not isinstance(input, int):
            raise InvalidConfiguration("counter must be an integer")
        if input < 0 or input > MAX_COUNTER:
            raise InvalidConfiguration("counter must fit in an unsigned 64-bit integer")

        hasher = hmac.new(self.byte_secret(), self.int_to_bytestring(input), self.digest)
        if hasher.digest_size < 18:
            raise InvalidConfiguration("digest size is lower than 18 bytes, which will trigger error on otp generation")
        hmac_hash = hasher.digest()

        # dynamic truncation: the low nibble of the last byte picks 4 bytes, top bit cleared
        offset = hmac_hash[-1] & 0x0F
        code = struct.unpack(">I", hmac_hash[offset : offset + 4])[0] & 0x7FFFFFFF
        return code % 10**self.digits

    def generate_otp(self, input: int) -> str:
        """
        :param input: the HMAC counter value to use as the OTP input.
        :returns: the code, left-padded with zeros to ``digits`` characters
        """
        return "{0:0{1}d}".format(self.generate_code(input), self.digits)

    def byte_secret(self) -> bytes:
        return decode_secret(self.secret)

    @staticmethod
    def int_to_bytestring(i: int, padding: int = 8) -> bytes:
        """
        Turns an integer to the OATH specified
        bytestring, which is fed to the HMAC
        along with the secret
        """
        return i.to_bytes(padding, "big")
