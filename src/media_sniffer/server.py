"""
HTTP Server - Media Sniffer

aiohttp application exposing POST /parse, plus the static web UI.
Owns the browser session lifecycle: launched in the background on startup,
closed on shutdown (SIGINT/SIGTERM via web.run_app).
"""

import asyncio
import logging
import os
from typing import Optional

from aiohttp import web

from .config import HOST, LOG_LEVEL, PORT, PUBLIC_DIR
from .crawler import BrowserManager, MediaParser

logger = logging.getLogger(__name__)

BROWSER_KEY = web.AppKey('browser', BrowserManager)
PARSER_KEY = web.AppKey('parser', MediaParser)
INIT_TASK_KEY = web.AppKey('browser_init', asyncio.Task)


# === Handlers ===

async def handle_parse(request: web.Request) -> web.Response:
    """Handle POST /parse with body {"url": "..."}."""
    try:
        payload = await request.json()
    except ValueError:
        # Invalid JSON or a body that is not UTF-8
        payload = {}

    url = payload.get('url') if isinstance(payload, dict) else None
    if not url or not isinstance(url, str):
        return web.json_response({'error': 'URL is required'}, status=400)

    try:
        result = await request.app[PARSER_KEY].parse(url)
    except Exception as e:
        logger.error(f"Error parsing URL {url}: {e}", exc_info=True)
        return web.json_response({'error': 'Failed to parse URL'}, status=500)

    return web.json_response({'data': [resource.to_dict() for resource in result['data']]})


async def handle_index(request: web.Request) -> web.FileResponse:
    """Serve the web UI."""
    return web.FileResponse(os.path.join(PUBLIC_DIR, 'index.html'))


# === Lifecycle ===

async def init_browser(browser: BrowserManager):
    """Launch the browser; failure is logged, the server keeps running."""
    try:
        await browser.init()
    except Exception as e:
        logger.error(f"Browser initialization failed, parse requests will fail: {e}")


async def on_startup(app: web.Application):
    app[INIT_TASK_KEY] = asyncio.create_task(init_browser(app[BROWSER_KEY]))


async def on_cleanup(app: web.Application):
    """Close the browser before exit."""
    task = app.get(INIT_TASK_KEY)
    if task and not task.done():
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    logger.info("Shutting down browser...")
    await app[BROWSER_KEY].close()


# === Main Application ===

def create_app(
    browser: Optional[BrowserManager] = None,
    parser: Optional[MediaParser] = None
) -> web.Application:
    """
    Create and configure the web application.

    Args:
        browser: Browser session, a new BrowserManager by default
        parser: Media parser, built on the browser session by default

    Returns:
        aiohttp application
    """
    browser = browser or BrowserManager()

    app = web.Application()
    app[BROWSER_KEY] = browser
    app[PARSER_KEY] = parser or MediaParser(browser)

    app.router.add_post('/parse', handle_parse)
    app.router.add_get('/', handle_index)
    if os.path.isdir(PUBLIC_DIR):
        app.router.add_static('/static/', PUBLIC_DIR)

    app.on_startup.append(on_startup)
    app.on_cleanup.append(on_cleanup)

    return app


def main():
    """Run the server."""
    logging.basicConfig(
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        level=getattr(logging, LOG_LEVEL.upper(), logging.INFO)
    )

    logger.info(f"Server is running on port {PORT}")
    web.run_app(create_app(), host=HOST, port=PORT, print=None)


if __name__ == '__main__':
    main()
