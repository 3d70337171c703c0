"""Public host resolution for incoming requests."""

from aiohttp import web

from govanity.config import HostConfig


def resolve_host(request: web.Request, config: HostConfig) -> str:
    """Return the domain the client used to reach the server.

    The configured override wins over everything. Otherwise the forwarded host
    header set by a reverse proxy is used, falling back to the request's Host.
    The result may be empty; callers render it as-is.
    """
    if config.override:
        return config.override
    if forwarded := request.headers.get(config.header):
        return forwarded
    return request.host or ""
