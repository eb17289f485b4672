import datetime
import math
import time
from typing import Any, Optional, Union

from . import utils
from .exceptions import InvalidConfiguration
from .otp import DEFAULT_DIGITS, OTP

DEFAULT_INTERVAL = 30

TimeLike = Union[int, float, datetime.datetime]


def _validate_step(step: int, t0: int) -> None:
    if isinstance(step, bool) or not isinstance(step, int) or step <= 0:
        raise InvalidConfiguration("step must be a positive integer number of seconds")
    if isinstance(t0, bool) or not isinstance(t0, int) or t0 < 0:
        raise InvalidConfiguration("t0 must be a non-negative integer")


def time_counter(unix_time: Union[int, float], step: int, t0: int = 0) -> int:
    """
    Returns ``floor((unix_time - t0) / step)``.

    Times before the epoch or before ``t0``, and non-finite times, are
    rejected rather than clamped to the first step.
    """
    _validate_step(step, t0)
    if isinstance(unix_time, bool) or not isinstance(unix_time, (int, float)):
        raise InvalidConfiguration("unix_time must be a number of seconds")
    if not math.isfinite(unix_time):
        raise InvalidConfiguration("unix_time must be finite")
    if unix_time < 0:
        raise InvalidConfiguration("unix_time must not be before the Unix epoch")
    if unix_time < t0:
        raise InvalidConfiguration("unix_time must not be before t0")
    return int((unix_time - t0) // step)


def totp_raw(
    secret_base32: str, step: int, t0: int, unix_time: Union[int, float], digits: int = DEFAULT_DIGITS
) -> int:
    """
    Computes the RFC 6238 TOTP value for a specific time.

    :param secret_base32: secret in base32 format
    :param step: time step in seconds, usually 30
    :param t0: Unix time to start counting steps from, usually 0
    :param unix_time: the time to compute the code for
    :param digits: number of digits in the code
    :returns: the code as an integer
    :raises InvalidSecretEncoding: if the secret is not valid base32
    :raises InvalidConfiguration: on a non-positive step, a time before
        the epoch or before ``t0``, or unsupported ``digits``
    """
    return OTP(secret_base32, digits=digits).generate_code(time_counter(unix_time, step, t0))


def totp_raw_now(secret_base32: str, step: int, t0: int, digits: int = DEFAULT_DIGITS) -> int:
    """
    Computes the TOTP value for the current wall-clock time.

    See :func:`totp_raw`.
    """
    return totp_raw(secret_base32, step, t0, time.time(), digits=digits)


class TOTP(OTP):
    """
    Handler for time-based OTP counters.
    """

    def __init__(
        self,
        s: str,
        digits: int = DEFAULT_DIGITS,
        digest: Any = None,
        name: Optional[str] = None,
        issuer: Optional[str] = None,
        interval: int = DEFAULT_INTERVAL,
        t0: int = 0,
    ) -> None:
        """
        :param s: secret in base32 format
        :param interval: the time interval in seconds for OTP. This defaults to 30.
        :param t0: Unix time the intervals are counted from
        :param digits: number of integers in the OTP. Some apps expect this to be 6 digits, others support more.
        :param digest: digest function to use in the HMAC (expected to be SHA1)
        :param name: account name
        :param issuer: issuer
        """
        _validate_step(interval, t0)
        self.interval = interval
        self.t0 = t0
        super().__init__(s=s, digits=digits, digest=digest, name=name, issuer=issuer)

    def at(self, for_time: TimeLike, counter_offset: int = 0) -> str:
        """
        Accepts either a Unix timestamp integer or a datetime object.

        :param for_time: the time to generate an OTP for
        :param counter_offset: the amount of ticks to add to the time counter
        :returns: OTP value
        """
        return self.generate_otp(self.timecode(for_time) + counter_offset)

    def now(self) -> str:
        """
        Generate the current time OTP

        :returns: OTP value
        """
        return self.generate_otp(self.timecode(time.time()))

    def verify(self, otp: str, for_time: Optional[TimeLike] = None, valid_window: int = 0) -> bool:
        """
        Verifies the OTP passed in against the current time OTP.

        Each step inside the window is computed separately; with the default
        ``valid_window`` of 0 only the step containing ``for_time`` matches.

        :param otp: the OTP to check against
        :param for_time: Time to check OTP at (defaults to now)
        :param valid_window: extends the validity to this many counter ticks before and after the current one
        :returns: True if verification succeeded, False otherwise
        """
        if for_time is None:
            for_time = time.time()

        counter = self.timecode(for_time)
        if valid_window:
            for i in range(-valid_window, valid_window + 1):
                if counter + i < 0:
                    continue
                if utils.strings_equal(str(otp), self.generate_otp(counter + i)):
                    return True
            return False

        return utils.strings_equal(str(otp), self.generate_otp(counter))

    def provisioning_uri(self, name: Optional[str] = None, issuer_name: Optional[str] = None, **kwargs) -> str:
        """
        Returns the provisioning URI for the OTP.  This can then be
        encoded in a QR Code and used to provision an OTP app like
        Google Authenticator.

        See also:
            https://github.com/google/google-authenticator/wiki/Key-Uri-Format

        """
        return utils.build_uri(
            self.secret,
            name if name else self.name,
            issuer=issuer_name if issuer_name else self.issuer,
            algorithm=self.digest().name,
            digits=self.digits,
            period=self.interval,
            **kwargs,
        )

    def timecode(self, for_time: TimeLike) -> int:
        """
        Accepts either a timezone naive (`for_time.tzinfo is None`) or
        a timezone aware datetime as argument and returns the
        corresponding counter value (timecode).

        """
        if isinstance(for_time, datetime.datetime):
            for_time = for_time.timestamp()
        return time_counter(for_time, self.interval, self.t0)
