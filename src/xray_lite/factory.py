"""Build clients and contexts from XRaySettings.

This is the configured counterpart of the ``from_lambda_env`` constructors:
instead of raising on missing variables it falls back to settings defaults
and, where tracing cannot be set up at all, to no-op collaborators.

The daemon client is process-wide and reused across invocations. The trace
header is not: Lambda sets ``_X_AMZN_TRACE_ID`` anew for every invocation, so
contexts read it from the environment each time they are built.
"""

from collections.abc import Callable

from pydantic import ValidationError

from xray_lite.client import Client, DaemonClient, InfallibleClient, parse_daemon_address
from xray_lite.config import XRaySettings, get_settings
from xray_lite.context import InfallibleContext, SubsegmentContext
from xray_lite.errors import BadConfigError, MissingEnvVarError
from xray_lite.header import parse
from xray_lite.lambda_env import TRACE_HEADER_ENV

_default_client: InfallibleClient | None = None


def current_settings() -> XRaySettings:
    """Read settings from the current environment.

    .env files are applied once through the settings singleton; the
    returned instance reflects the environment as it is now.

    Raises:
        ValidationError: If a configured value is invalid.
    """
    get_settings()
    return XRaySettings()


def _resolve(settings: XRaySettings | None, loader: Callable[[], XRaySettings]) -> XRaySettings:
    if settings is not None:
        return settings
    try:
        return loader()
    except ValidationError as e:
        raise BadConfigError(str(e)) from e


def client_from_settings(settings: XRaySettings | None = None) -> InfallibleClient:
    """Create a client connected to the configured daemon.

    Args:
        settings: Settings to use. Defaults to the settings singleton.

    Returns:
        Operational client, or a no-op client if the settings are invalid or
        the socket cannot be set up.
    """

    def build() -> DaemonClient:
        daemon_address = _resolve(settings, get_settings).daemon_address
        return DaemonClient(parse_daemon_address(daemon_address))

    return InfallibleClient.from_factory(build)


def get_default_client() -> InfallibleClient:
    """Get the process-wide client built from the settings singleton."""
    global _default_client
    if _default_client is None:
        _default_client = client_from_settings()
    return _default_client


def context_from_settings(
    settings: XRaySettings | None = None, client: Client | None = None
) -> InfallibleContext:
    """Create a tracing context for the current invocation.

    Call this once per invocation. Without explicit settings the trace header
    is read from the environment on every call.

    Args:
        settings: Settings to use. Defaults to current_settings().
        client: Client to report with. Defaults to get_default_client().

    Returns:
        Context nested under the configured trace header, or a no-op context
        if no valid trace header is configured.
    """

    def build() -> SubsegmentContext:
        resolved = _resolve(settings, current_settings)
        if resolved.trace_header is None:
            raise MissingEnvVarError(TRACE_HEADER_ENV)
        try:
            header = parse(resolved.trace_header)
        except ValueError as e:
            raise BadConfigError(f"invalid X-Ray trace ID header value: {e}") from e
        return SubsegmentContext(
            client=client if client is not None else get_default_client(),
            header=header,
            name_prefix=resolved.name_prefix,
        )

    return InfallibleContext.from_factory(build)
