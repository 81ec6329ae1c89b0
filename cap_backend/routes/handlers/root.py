from aiohttp import web

SERVICE_BANNER = "ComfyUI API Proxy"


def register_root_routes(routes: web.RouteTableDef) -> None:
    @routes.get("/")
    async def root(_request: web.Request) -> web.Response:
        return web.Response(text=SERVICE_BANNER)
