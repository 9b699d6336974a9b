from typing import Any, Dict, List, Optional

import uvicorn
from fastapi import Body, FastAPI

from rsshub_mcp.main.config import Settings
from rsshub_mcp.main.log import init_log
from rsshub_mcp.service import get_dispatcher

app = FastAPI(
    title="RSSHub MCP HTTP API",
    description="Plain HTTP access to the RSSHub MCP tool catalog.",
    version="0.1.0",
    docs_url="/docs",        # Swagger UI
    redoc_url="/redoc",      # ReDoc UI
    openapi_url="/openapi.json",
)


@app.get("/", tags=["Root"], summary="API root")
async def read_root():
    return {"message": "Welcome to the RSSHub MCP HTTP API!"}


@app.get(
    path="/tools",
    tags=["Tools"],
    summary="List tools",
    description="Return every tool with its description and JSON input schema.",
)
async def list_tools() -> List[Dict[str, Any]]:
    return get_dispatcher().list_tools()


@app.post(
    "/tools/{name}",
    tags=["Tools"],
    summary="Call a tool",
    description=(
        "Invoke the tool ``name`` with the JSON object body as its arguments. "
        "Failures are reported in-band: the response always has status 200 and "
        "``isError`` tells whether the call succeeded."
    ),
)
async def call_tool(name: str, arguments: Optional[Dict[str, Any]] = Body(default=None)) -> Dict[str, Any]:
    response = await get_dispatcher().handle_tool_call(name, arguments)
    return response.to_dict()


def main():
    init_log("info")
    settings = Settings.from_env()
    get_dispatcher(settings)
    uvicorn.run(app, host=settings.server_host, port=settings.server_port)


if __name__ == "__main__":
    main()
