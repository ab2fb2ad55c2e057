"""
Pass-through relay: GET /proxy?url=<target> fetches the target with the
Fastly/Pantheon debug headers and returns {url, status, headers, body}.
"""
from aiohttp import web
from cachecheck.http_client import HttpClient, DEBUG_HEADERS
from cachecheck.utils.logger import logger

CLIENT_KEY = web.AppKey("client", HttpClient)

async def add_cors_headers(request: web.Request, response: web.StreamResponse):
    response.headers["Access-Control-Allow-Origin"] = "*"

async def proxy_handler(request: web.Request) -> web.StreamResponse:
    target = request.query.get("url")
    if not target:
        return web.Response(status=400, text="Missing ?url param")

    client: HttpClient = request.app[CLIENT_KEY]
    logger.info(f"Relaying request for {target}")
    resp = await client.request("GET", target, headers=dict(DEBUG_HEADERS))
    if not resp:
        logger.warning(f"Relay failed to fetch {target}")
        return web.json_response(
            {"error": "Failed to fetch target", "details": f"Request to {target} failed"},
            status=500
        )

    return web.json_response({
        "url": target,
        "status": resp["status"],
        "headers": {k.lower(): v for k, v in resp["headers"].items()},
        "body": resp["body"].decode("utf-8", errors="replace"),
    })

def create_app(timeout: int = 10) -> web.Application:
    app = web.Application()
    app.on_response_prepare.append(add_cors_headers)
    app.router.add_get("/proxy", proxy_handler)

    async def client_ctx(app: web.Application):
        async with HttpClient(timeout=timeout) as client:
            app[CLIENT_KEY] = client
            yield

    app.cleanup_ctx.append(client_ctx)
    return app

def run_relay(host: str = "0.0.0.0", port: int = 3000, timeout: int = 10):
    logger.info(f"Relay running on {host}:{port}")
    web.run_app(create_app(timeout=timeout), host=host, port=port, print=None)
