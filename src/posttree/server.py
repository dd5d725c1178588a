"""aiohttp server for posttree.

Application factory and route registration for standalone server mode.
"""

from aiohttp import web

from posttree.api.navigation import create_navigation_routes
from posttree.app_keys import options_key, site_loader_key
from posttree.config import Config
from posttree.loader import SiteLoader


def create_app(config: Config) -> web.Application:
    """Create aiohttp application.

    Args:
        config: Application configuration

    Returns:
        Configured aiohttp application
    """
    app = web.Application()
    app[site_loader_key] = SiteLoader(config.site.source)
    app[options_key] = config.render_options()
    app.router.add_routes(create_navigation_routes())
    return app


def run_server(config: Config) -> None:
    """Run the server.

    Args:
        config: Application configuration
    """
    app = create_app(config)
    web.run_app(app, host=config.server.host, port=config.server.port)
