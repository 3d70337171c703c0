"""aiohttp server for govanity.

Application factory, request handlers and the blocking server runner.
"""

import logging

from aiohttp import hdrs, web

from govanity.app_keys import host_config_key, registry_key, renderer_key
from govanity.config import Config
from govanity.host import resolve_host
from govanity.registry import Registry
from govanity.renderer import (
    HomeContext,
    RedirectContext,
    RenderContext,
    TemplateKind,
    TemplateRenderer,
    TemplateRenderError,
    VanityContext,
)

logger = logging.getLogger(__name__)

GO_GET_PARAM = "go-get"
HTML_CONTENT_TYPE = "text/html; charset=utf-8"


async def home(request: web.Request) -> web.StreamResponse:
    """List every registered package."""
    registry = request.app[registry_key]
    context = HomeContext(
        domain=resolve_host(request, request.app[host_config_key]),
        packages=registry.packages,
        count=len(registry),
    )
    return await _render_page(request, TemplateKind.HOME, context)


async def package(request: web.Request) -> web.StreamResponse:
    """Serve go-get metadata or redirect browsers to the documentation.

    Tooling asks with ``?go-get=1`` and receives go-import/go-source meta tags.
    Anything else gets a page that refreshes to pkg.go.dev.
    """
    pkg = request.app[registry_key].find_by_path(request.path)
    if pkg is None:
        raise web.HTTPNotFound()

    domain = resolve_host(request, request.app[host_config_key])
    context: RenderContext
    if request.query.get(GO_GET_PARAM) == "1":
        kind = TemplateKind.VANITY
        context = VanityContext(domain=domain, path=pkg.path, repo=pkg.repo, vcs=pkg.vcs)
    else:
        kind = TemplateKind.REDIRECT
        context = RedirectContext(domain=domain, path=pkg.path)

    return await _render_page(request, kind, context)


async def _render_page(
    request: web.Request,
    kind: TemplateKind,
    context: RenderContext,
) -> web.StreamResponse:
    """Stream a rendered template to the client.

    A template that fails to load yields a 500 with the error text. Once headers
    are sent a rendering failure can only be logged; the client sees a
    truncated body. HEAD requests get the headers only.
    """
    renderer = request.app[renderer_key]
    try:
        template = renderer.load(kind)
        chunks = renderer.generate(template, kind, context)
    except TemplateRenderError as e:
        logger.error(f"Failed to prepare template: {e}")
        return web.Response(status=500, text=str(e))

    response = web.StreamResponse(headers={"Content-Type": HTML_CONTENT_TYPE})
    await response.prepare(request)
    if request.method == hdrs.METH_HEAD:
        await response.write_eof()
        return response

    try:
        for chunk in chunks:
            await response.write(chunk.encode("utf-8"))
    except TemplateRenderError as e:
        logger.error(f"Template execution error: {e}")
        return response
    except ConnectionResetError:
        logger.warning(f"Client disconnected while writing {request.path}")
        return response

    await response.write_eof()
    return response


def create_app(config: Config, *, registry: Registry | None = None) -> web.Application:
    """Create aiohttp application.

    Args:
        config: Application configuration
        registry: Package registry (default: compiled-in packages)

    Returns:
        Configured aiohttp application
    """
    app = web.Application()

    app[registry_key] = registry if registry is not None else Registry()
    app[renderer_key] = TemplateRenderer()
    app[host_config_key] = config.vanity

    # Exact root must be registered before the catch-all package route
    app.router.add_get("/", home)
    app.router.add_get("/{path:.*}", package)

    return app


def run_server(config: Config) -> None:
    """Run the server until interrupted.

    Args:
        config: Application configuration

    Raises:
        OSError: If the listener cannot bind
    """
    app = create_app(config)
    logger.info(f"Server listening on {config.server.host}:{config.server.port}")
    web.run_app(app, host=config.server.host, port=config.server.port, print=None)
