"""HTTP server exposing host metrics."""

from __future__ import annotations

import argparse
from collections.abc import Callable
from typing import Any

import uvicorn
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse, Response
from starlette.routing import Route

from picolab.metrics import Cpu, Disk, Host, Kind, Memory, Process, Summary, System, init

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080


async def home_page(request: Request) -> Response:
    """Describe the server."""
    return PlainTextResponse("This is a system montior HTTP server")


async def health_check(request: Request) -> Response:
    """Report that the server is up."""
    return PlainTextResponse("Server is running")


async def get_all_metrics(request: Request) -> Response:
    """Return every metric group."""
    host = await init()
    return JSONResponse(Summary.generate(host).to_dict())


_GENERATORS: dict[Kind, Callable[[Host], Any]] = {
    Kind.SYSTEM: lambda host: System.generate().to_dict(),
    Kind.PROCESS: lambda host: [p.to_dict() for p in Process.generate(host)],
    Kind.MEMORY: lambda host: Memory.generate(host).to_dict(),
    Kind.CPU: lambda host: Cpu.generate(host).to_dict(),
    Kind.DISK: lambda host: [d.to_dict() for d in Disk.generate(host)],
}


async def get_specific_metric(request: Request) -> Response:
    """Return one metric group named in the path."""
    name = request.path_params["kind"]
    try:
        kind = Kind(name)
    except ValueError:
        expected = ", ".join(f"`{k.value}`" for k in Kind)
        return PlainTextResponse(
            f"Invalid URL: unknown variant `{name}`, expected one of {expected}",
            status_code=400,
        )
    host = await init()
    return JSONResponse(_GENERATORS[kind](host))


async def get_metrics_in_real_time(request: Request) -> Response:
    """Return a fresh snapshot of every metric group."""
    host = await init()
    return JSONResponse(Summary.generate(host).to_dict())


def app() -> Starlette:
    """Build the application with all routes."""
    return Starlette(
        routes=[
            Route("/", home_page, methods=["GET"]),
            Route("/healthcheck", health_check, methods=["GET"]),
            Route("/metrics", get_all_metrics, methods=["GET"]),
            Route("/metrics/{kind}", get_specific_metric, methods=["GET"]),
            Route("/realtime", get_metrics_in_real_time, methods=["GET"]),
        ]
    )


def main(argv: list[str] | None = None) -> None:
    """Serve the application until interrupted."""
    parser = argparse.ArgumentParser(description="System monitor HTTP server.")
    parser.add_argument("--host", default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    args = parser.parse_args(argv)
    print(f"Server running on http://{args.host}:{args.port}", flush=True)
    uvicorn.run(app(), host=args.host, port=args.port)