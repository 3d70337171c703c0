"""Application keys for type-safe app configuration access."""

from aiohttp import web

from govanity.config import HostConfig
from govanity.registry import Registry
from govanity.renderer import TemplateRenderer

registry_key = web.AppKey("registry", Registry)
renderer_key = web.AppKey("renderer", TemplateRenderer)
host_config_key = web.AppKey("host_config", HostConfig)
