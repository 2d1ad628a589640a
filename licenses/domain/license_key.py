"""
License key generation and structural validation.

Keys have the form ``PREFIX-TIMESTAMP-TOKEN[-TOKEN]``: an upper-case
type prefix, the issue time in base36 milliseconds, and one or more
random tokens. They are opaque; nothing here verifies a signature.
"""
import re
import secrets
import string
import time
from dataclasses import dataclass
from typing import Optional

from core.domain.value_objects import LicenseType

KEY_ALPHABET = string.ascii_uppercase + string.digits
TOKEN_LENGTH = 10  # 36**10 ~ 2**51

PREFIXES = {
    LicenseType.COMMUNITY: "COMM",
    LicenseType.TRIAL: "TRIAL",
    LicenseType.ENTERPRISE: "ENT",
}
DEFAULT_CUSTOM_PREFIX = "CUST"

SEGMENT_COUNTS = {
    LicenseType.COMMUNITY: 3,
    LicenseType.TRIAL: 3,
    LicenseType.ENTERPRISE: 4,
    LicenseType.CUSTOM: 3,
}

_BASE36_DIGITS = string.digits + string.ascii_uppercase
_PREFIX_PATTERN = re.compile(r"^[A-Z][A-Z0-9]{1,9}$")
_SEGMENT_PATTERN = re.compile(r"^[A-Z0-9]+$")


@dataclass(frozen=True)
class KeyFormatResult:
    """Outcome of a structural key check."""

    valid: bool
    license_type: Optional[LicenseType] = None
    error: Optional[str] = None


def _base36(number: int) -> str:
    digits = []
    while True:
        number, remainder = divmod(number, 36)
        digits.append(_BASE36_DIGITS[remainder])
        if number == 0:
            break
    return "".join(reversed(digits))


def _random_token(length: int = TOKEN_LENGTH) -> str:
    return "".join(secrets.choice(KEY_ALPHABET) for _ in range(length))


def generate_license_key(
    license_type: LicenseType, custom_prefix: Optional[str] = None
) -> str:
    """
    Generate a license key for a license type.

    Args:
        license_type: Type of the license being issued
        custom_prefix: Prefix to use for custom licenses

    Returns:
        Upper-case, dash-delimited license key
    """
    if license_type == LicenseType.CUSTOM:
        prefix = (custom_prefix or DEFAULT_CUSTOM_PREFIX).upper()
        if not _PREFIX_PATTERN.match(prefix):
            raise ValueError(f"Invalid custom key prefix: {custom_prefix}")
    else:
        prefix = PREFIXES[license_type]

    timestamp = _base36(int(time.time() * 1000))
    token_count = SEGMENT_COUNTS[license_type] - 2
    tokens = [_random_token() for _ in range(token_count)]
    return "-".join([prefix, timestamp, *tokens]).upper()


def validate_key_format(key: str) -> KeyFormatResult:
    """
    Check a key's structure without looking it up.

    Args:
        key: Candidate license key

    Returns:
        KeyFormatResult with the inferred license type when valid
    """
    if not key or not isinstance(key, str):
        return KeyFormatResult(valid=False, error="License key is empty")

    segments = key.split("-")
    prefix = segments[0]
    license_type = next(
        (lt for lt, known in PREFIXES.items() if known == prefix),
        LicenseType.CUSTOM,
    )

    expected = SEGMENT_COUNTS[license_type]
    if license_type == LicenseType.ENTERPRISE:
        segment_ok = len(segments) >= 3
    else:
        segment_ok = len(segments) == expected
    if not segment_ok:
        return KeyFormatResult(
            valid=False,
            error=f"Expected {expected} segments for a {license_type.value} key, got {len(segments)}",
        )

    if license_type == LicenseType.CUSTOM and not _PREFIX_PATTERN.match(prefix):
        return KeyFormatResult(valid=False, error=f"Unknown key prefix: {prefix}")
    if not all(_SEGMENT_PATTERN.match(segment) for segment in segments):
        return KeyFormatResult(valid=False, error="Key contains invalid characters")

    return KeyFormatResult(valid=True, license_type=license_type)
