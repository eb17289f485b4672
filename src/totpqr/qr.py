import enum
import logging
from typing import Optional, Protocol, Tuple

import qrcode
import qrcode.constants
from qrcode.exceptions import DataOverflowError

from .exceptions import PayloadTooLarge

logger = logging.getLogger(__name__)

Matrix = Tuple[Tuple[bool, ...], ...]

MIN_VERSION = 1
MAX_VERSION = 40


class EcLevel(enum.Enum):
    """QR error correction levels, from most capacity to most resilience."""

    LOW = "L"
    MEDIUM = "M"
    QUARTILE = "Q"
    HIGH = "H"


_QRCODE_EC_LEVELS = {
    EcLevel.LOW: qrcode.constants.ERROR_CORRECT_L,
    EcLevel.MEDIUM: qrcode.constants.ERROR_CORRECT_M,
    EcLevel.QUARTILE: qrcode.constants.ERROR_CORRECT_Q,
    EcLevel.HIGH: qrcode.constants.ERROR_CORRECT_H,
}


class QRMatrixProvider(Protocol):
    def matrix(self, payload: str, version: Optional[int], ec_level: EcLevel) -> Matrix:
        """
        Encodes ``payload`` and returns the square module matrix, True for
        dark modules, without a quiet zone.

        :param version: QR version 1-40, or None to pick the smallest that fits
        :raises PayloadTooLarge: if the payload does not fit
        """
        ...


class QRCodeMatrixProvider(object):
    """
    Module matrices built by the ``qrcode`` package.
    """

    def matrix(self, payload: str, version: Optional[int], ec_level: EcLevel) -> Matrix:
        qr = qrcode.QRCode(version=version, error_correction=_QRCODE_EC_LEVELS[ec_level], border=0)
        qr.add_data(payload)
        try:
            qr.make(fit=version is None)
        except (DataOverflowError, ValueError) as e:
            # qrcode 8 reports an auto-fit past version 40 as an invalid version
            if isinstance(e, ValueError) and version is not None:
                raise
            raise PayloadTooLarge(
                "payload of {} bytes does not fit QR version {} at EC level {}".format(
                    len(payload.encode("utf-8")), version if version is not None else MAX_VERSION, ec_level.value
                )
            ) from e
        logger.debug("encoded QR version %s at EC level %s", qr.version, ec_level.value)
        return tuple(tuple(bool(cell) for cell in row) for row in qr.get_matrix())
