"""AWS error inspection helpers."""
from typing import Iterable

from botocore.exceptions import ClientError


def error_code(error: ClientError) -> str:
    return error.response.get('Error', {}).get('Code', '')


def is_error_code(error: BaseException, codes: Iterable[str]) -> bool:
    """True if ``error`` is a ClientError with one of ``codes``."""
    return isinstance(error, ClientError) and error_code(error) in set(codes)
