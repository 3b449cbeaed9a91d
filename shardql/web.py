"""Web dashboard server: status and query API plus live WebSocket updates."""

from __future__ import annotations

import argparse
import asyncio
import contextlib
import json
import logging
import time
from pathlib import Path
from typing import Optional, Sequence, Union

from aiohttp import WSMsgType, web

from shardql.dashboard import SystemView, VisualizationData
from shardql.system_client import SystemClient

_log = logging.getLogger(__name__)

UPDATE_INTERVAL = 2.0
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8080
DEFAULT_STATIC_DIR = "visualizer/static"

CLIENT_KEY = web.AppKey("client", SystemClient)
VISUALIZATION_KEY = web.AppKey("visualization", VisualizationData)
STATIC_DIR_KEY = web.AppKey("static_dir", Path)

_CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "content-type",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
}


def _rem(value: int, modulus: int) -> int:
    remainder = abs(value) % modulus
    return -remainder if value < 0 else remainder


def performance_snapshot(status: SystemView, timestamp: Optional[int] = None) -> dict:
    """Message pushed to dashboards; without a timestamp, the baseline figures."""
    ts = timestamp or 0
    return {
        "system_status": status.to_dict(),
        "performance_metrics": {
            "total_queries": 42 + _rem(ts, 100),
            "average_latency_ms": 95.5 + _rem(ts, 20),
            "queries_per_second": 12.3 + _rem(ts, 5),
            "error_rate": 0.02,
            "worker_utilization": {
                "worker1": 25.0 + _rem(ts, 10),
                "worker2": 30.0 + _rem(ts, 15),
                "worker3": 35.0 + _rem(ts, 20),
            },
        },
    }


@web.middleware
async def _cors(request: web.Request, handler) -> web.StreamResponse:
    if request.method == "OPTIONS":
        return web.Response(headers=_CORS_HEADERS)
    try:
        response = await handler(request)
    except web.HTTPException as exc:
        exc.headers.update(_CORS_HEADERS)
        raise
    if not response.prepared:
        response.headers.update(_CORS_HEADERS)
    return response


async def _index(request: web.Request) -> web.StreamResponse:
    page = request.app[STATIC_DIR_KEY] / "index.html"
    if not page.is_file():
        raise web.HTTPNotFound()
    return web.FileResponse(page)


async def _static(request: web.Request) -> web.StreamResponse:
    root = request.app[STATIC_DIR_KEY].resolve()
    target = (root / request.match_info["path"]).resolve()
    if not target.is_relative_to(root) or not target.is_file():
        raise web.HTTPNotFound()
    return web.FileResponse(target)


async def _status(request: web.Request) -> web.Response:
    try:
        status = await request.app[CLIENT_KEY].get_system_status()
    except Exception as exc:
        _log.error("Failed to get system status: %s", exc)
        raise web.HTTPInternalServerError(text="system error") from exc
    return web.json_response(status.to_dict())


async def _query(request: web.Request) -> web.Response:
    try:
        body = await request.json()
    except ValueError as exc:
        raise web.HTTPBadRequest(text="Request body deserialize error") from exc
    sql_query = body.get("query") if isinstance(body, dict) else None
    if not isinstance(sql_query, str):
        raise web.HTTPInternalServerError(text="system error")
    try:
        result = await request.app[CLIENT_KEY].execute_query(sql_query)
    except Exception as exc:
        _log.error("Failed to execute query: %s", exc)
        raise web.HTTPInternalServerError(text="system error") from exc
    return web.json_response(result.to_dict())


async def _push_updates(ws: web.WebSocketResponse, client: SystemClient) -> None:
    while True:
        try:
            status = await client.get_system_status()
        except Exception as exc:
            _log.error("Failed to get system status: %s", exc)
            break
        message = json.dumps(performance_snapshot(status, int(time.time())))
        try:
            await ws.send_str(message)
        except (ConnectionError, RuntimeError) as exc:
            _log.error("Failed to send update: %s", exc)
            break
        await asyncio.sleep(UPDATE_INTERVAL)
    await ws.close()


async def _websocket(request: web.Request) -> web.WebSocketResponse:
    client = request.app[CLIENT_KEY]
    ws = web.WebSocketResponse()
    await ws.prepare(request)
    _log.info("WebSocket connection established")
    try:
        status = await client.get_system_status()
    except Exception as exc:
        _log.error("Failed to get initial system status: %s", exc)
        await ws.close()
        return ws
    try:
        await ws.send_str(json.dumps(performance_snapshot(status)))
    except (ConnectionError, RuntimeError) as exc:
        _log.error("Failed to send initial data: %s", exc)
        return ws

    sender = asyncio.create_task(_push_updates(ws, client))
    try:
        async for msg in ws:
            if msg.type == WSMsgType.TEXT:
                _log.info("Received WebSocket message: %s", msg.data)
            elif msg.type == WSMsgType.ERROR:
                _log.error("WebSocket error: %s", ws.exception())
                break
    finally:
        sender.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await sender
    _log.info("WebSocket connection ended")
    return ws


async def _refresh_loop(app: web.Application) -> None:
    client = app[CLIENT_KEY]
    while True:
        try:
            status = await client.get_system_status()
        except Exception as exc:
            _log.error("Failed to get system status: %s", exc)
        else:
            app[VISUALIZATION_KEY].update_system_status(status)
        await asyncio.sleep(UPDATE_INTERVAL)


async def _background(app: web.Application):
    task = asyncio.create_task(_refresh_loop(app))
    yield
    task.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await task


def create_app(
    client: SystemClient, static_dir: Union[str, Path] = DEFAULT_STATIC_DIR
) -> web.Application:
    """Build the dashboard application around ``client``."""
    app = web.Application(middlewares=[_cors])
    app[CLIENT_KEY] = client
    app[VISUALIZATION_KEY] = VisualizationData()
    app[STATIC_DIR_KEY] = Path(static_dir)
    app.router.add_get("/", _index)
    app.router.add_get("/static/{path:.+}", _static)
    app.router.add_route("*", "/api/status", _status)
    app.router.add_post("/api/query", _query)
    app.router.add_get("/ws", _websocket)
    app.cleanup_ctx.append(_background)
    return app


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Query engine dashboard server")
    parser.add_argument("--host", default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("--static-dir", default=DEFAULT_STATIC_DIR)
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO)
    _log.info("Dashboard starting on http://%s:%d", args.host, args.port)
    web.run_app(
        create_app(SystemClient(), args.static_dir), host=args.host, port=args.port
    )