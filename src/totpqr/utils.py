import unicodedata
from hmac import compare_digest
from typing import Dict, Optional, Union
from urllib.parse import quote, urlencode, urlparse

from .exceptions import InvalidConfiguration


def build_uri(
    secret: str,
    name: str,
    initial_count: Optional[int] = None,
    issuer: Optional[str] = None,
    algorithm: Optional[str] = None,
    digits: Optional[int] = None,
    period: Optional[int] = None,
    **kwargs,
) -> str:
    """
    Returns the provisioning URI for the OTP; works for either TOTP or HOTP.

    This can then be encoded in a QR Code and used to provision the Google
    Authenticator app.

    See also:
        https://github.com/google/google-authenticator/wiki/Key-Uri-Format

    :param secret: the hotp/totp secret used to generate the URI
    :param name: name of the account
    :param initial_count: starting counter value, defaults to None.
        If none, the OTP type will be assumed as TOTP.
    :param issuer: the name of the OTP issuer; this will be the
        organization title of the OTP entry in Authenticator
    :param algorithm: the algorithm used in the OTP generation.
    :param digits: the length of the OTP generated code.
    :param period: the number of seconds the OTP generator is set to
        expire every code.
    :param kwargs: other query string parameters to include in the URI
    :returns: provisioning uri
    """
    if not secret:
        raise InvalidConfiguration("secret must not be empty")
    if not name:
        raise InvalidConfiguration("account name must not be empty")
    # the label uses ":" to separate issuer from account
    if ":" in name:
        raise InvalidConfiguration("account name must not contain ':'")
    if issuer is not None and ":" in issuer:
        raise InvalidConfiguration("issuer must not contain ':'")

    # initial_count may be 0 as a valid param
    otp_type = "hotp" if initial_count is not None else "totp"
    base_uri = "otpauth://{0}/{1}?{2}"

    url_args: Dict[str, Union[None, int, str]] = {"secret": secret}

    label = quote(name, safe="")
    if issuer:
        label = quote(issuer, safe="") + ":" + label
        url_args["issuer"] = issuer

    if initial_count is not None:
        url_args["counter"] = initial_count
    if algorithm is not None:
        url_args["algorithm"] = algorithm.upper()
    if digits is not None:
        url_args["digits"] = digits
    if period is not None:
        url_args["period"] = period
    for k, v in kwargs.items():
        if not isinstance(v, str):
            raise InvalidConfiguration("All otpauth uri parameters must be strings")
        if k == "image":
            image_uri = urlparse(v)
            if image_uri.scheme != "https" or not image_uri.netloc or not image_uri.path:
                raise InvalidConfiguration("{} is not a valid url".format(v))
        url_args[k] = v

    return base_uri.format(otp_type, label, urlencode(url_args).replace("+", "%20"))


def strings_equal(s1: str, s2: str) -> bool:
    """
    Timing-attack resistant string comparison.

    Normal comparison using == will short-circuit on the first mismatching
    character. This avoids that by scanning the whole string, though we
    still reveal to a timing attack whether the strings are the same
    length.
    """
    s1 = unicodedata.normalize("NFKC", s1)
    s2 = unicodedata.normalize("NFKC", s2)
    return compare_digest(s1.encode("utf-8"), s2.encode("utf-8"))
