#!/usr/bin/env python3
"""
HTTP Server Entrypoint

HTTP API server that exposes all registered Shopify tools.
Tools are automatically discovered via registry.py
"""

import logging
import os
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from .config import Settings, configure_logging
from .registry import ToolRegistry

logger = logging.getLogger(__name__)

SERVICE_NAME = "Shopify MCP Server"
SERVICE_VERSION = "1.0.0"


class ToolRequest(BaseModel):
    """Request body for tool execution."""

    arguments: Dict[str, Any] = {}


class ToolError(BaseModel):
    message: str
    detail: Any = None
    type: str


class ToolResponse(BaseModel):
    """Response from tool execution."""

    success: bool
    tool: str
    data: Any = None
    error: Optional[ToolError] = None


def _describe_parameters(tool) -> list:
    return [
        {
            "name": p.name,
            "type": p.type,
            "description": p.description,
            "required": p.required,
            "default": p.default,
            "enum": p.enum,
        }
        for p in tool.parameters
    ]


def create_app(registry: Optional[ToolRegistry] = None) -> FastAPI:
    """
    Build the FastAPI app.

    Without an explicit registry one is built from the environment at
    startup and its HTTP client is closed on shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = registry is None
        if owned:
            settings = Settings.from_env()
            configure_logging(settings.log_level)
            app.state.registry = ToolRegistry.from_settings(settings)

        names = app.state.registry.list_tool_names()
        logger.info(f"Shopify MCP Server starting with {len(names)} tools")
        for name in names:
            logger.info(f"  - {name}")

        yield

        if owned:
            await app.state.registry.aclose()
        logger.info("Shopify MCP Server shutting down")

    app = FastAPI(
        title=SERVICE_NAME,
        description="Shopify Admin API tools over the Model Context Protocol",
        version=SERVICE_VERSION,
        lifespan=lifespan,
    )
    app.state.registry = registry
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    def _registry(request: Request) -> ToolRegistry:
        return request.app.state.registry

    # ============== API Endpoints ==============

    @app.get("/")
    async def root(request: Request):
        return {
            "service": SERVICE_NAME,
            "version": SERVICE_VERSION,
            "tools_count": len(_registry(request).list_tool_names()),
            "endpoints": {
                "list_tools": "/tools",
                "tool_schema": "/tools/schema",
                "execute": "/tools/{tool_name}/execute",
                "health": "/health",
            },
        }

    @app.get("/health")
    async def health(request: Request):
        return {"status": "healthy", "tools_loaded": len(_registry(request).list_tool_names())}

    @app.get("/tools")
    async def list_tools(request: Request):
        tools = _registry(request).get_all_tools()
        return {
            "total": len(tools),
            "tools": [
                {
                    "name": name,
                    "description": tool.description,
                    "category": tool.category,
                    "parameters": _describe_parameters(tool),
                }
                for name, tool in tools.items()
            ],
        }

    @app.get("/tools/schema")
    async def get_tools_schema(request: Request):
        return {"tools": _registry(request).get_openai_tools_schema()}

    @app.get("/tools/{tool_name}")
    async def get_tool_info(tool_name: str, request: Request):
        tool = _registry(request).get_tool(tool_name)
        if tool is None:
            raise HTTPException(status_code=404, detail=f"Tool not found: {tool_name}")

        return {
            "name": tool.name,
            "description": tool.description,
            "category": tool.category,
            "parameters": _describe_parameters(tool),
            "input_schema": tool.input_schema,
        }

    @app.post("/tools/{tool_name}/execute", response_model=ToolResponse)
    async def execute_tool_endpoint(tool_name: str, body: ToolRequest, request: Request):
        result = await _registry(request).execute_tool(tool_name, **body.arguments)
        return ToolResponse(**result)

    return app


app = create_app()


def main():
    """Run the HTTP server."""
    import uvicorn

    configure_logging(os.getenv("LOG_LEVEL", "INFO"))
    host = os.getenv("MCP_HOST", "0.0.0.0")
    port = int(os.getenv("MCP_PORT", "8000"))
    logger.info(f"Starting Shopify MCP server on {host}:{port}")
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
