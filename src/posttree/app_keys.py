"""Application keys for type-safe app configuration access."""

from aiohttp import web

from posttree.core.navigation import RenderOptions
from posttree.loader import SiteLoader

site_loader_key = web.AppKey("site_loader", SiteLoader)
options_key = web.AppKey("options", RenderOptions)
