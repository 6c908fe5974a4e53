"""Trace header of the currently executing Lambda invocation."""

import os

from xray_lite.errors import BadConfigError, HeaderParseError, MissingEnvVarError
from xray_lite.header import Header, parse

TRACE_HEADER_ENV = "_X_AMZN_TRACE_ID"


def header() -> Header:
    """Read the trace header from ``_X_AMZN_TRACE_ID``.

    Returns:
        Parsed header of the current invocation.

    Raises:
        MissingEnvVarError: If the variable is not set.
        BadConfigError: If the variable cannot be parsed as a trace header.
    """
    value = os.environ.get(TRACE_HEADER_ENV)
    if value is None:
        raise MissingEnvVarError(TRACE_HEADER_ENV)
    try:
        return parse(value)
    except HeaderParseError as e:
        raise BadConfigError(f"invalid X-Ray trace ID header value: {e}") from e
