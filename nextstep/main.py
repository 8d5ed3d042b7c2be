"""Main MCP server entry point"""
import json
import textwrap
from typing import Any, Dict, List, Optional

import mcp.types as types
from mcp.types import TextContent
from mcp.server.fastmcp import FastMCP
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from dotenv import load_dotenv

from nextstep.config import settings, VALID_TONES
from nextstep.logger import create_logger, classify_error, ErrorType
from nextstep.schemas.nextstep import NextStepRequest
from nextstep.tools.formatting import format_money
from nextstep.tools.next_step import next_step_handler, NextStepValidationError
from nextstep.tools.tool_descriptions import GET_NEXT_STEP_DESCRIPTION
from nextstep.tools.trigger_selection import TRIGGER_PRIORITY

load_dotenv()

# Create logger for main module
logger = create_logger("main")

# Validate settings on startup
try:
    settings.validate_settings()
except ValueError as e:
    logger.error("Invalid settings", {"error": str(e), "error_type": ErrorType.CONFIG_ERROR.value})
    raise

MCP_SERVER_DESCRIPTION = """
NextStep advisor - turns monthly budget totals into one prioritized, tone-adapted suggestion.
"""

mcp = FastMCP(
    "nextstep-advisor",
    stateless_http=True,
    streamable_http_path="/mcp"
)

mcp._mcp_server.description = textwrap.dedent(MCP_SERVER_DESCRIPTION).strip()


@mcp.custom_route("/api/info", methods=["GET"])
async def server_info(request):
    """Server name, description and endpoints (GET /mcp belongs to the MCP transport)"""
    return JSONResponse(
        {
            "status": "ok",
            "endpoints": {"mcp": "/mcp", "health": "/health", "next_step": "/api/next-step"},
            "name": mcp._mcp_server.name,
            "description": mcp._mcp_server.description,
        }
    )


@mcp.custom_route("/health", methods=["GET"])
async def health(request):
    """Health check endpoint"""
    return JSONResponse({"status": "ok"})


def build_structured_call_result(result: Dict[str, Any]) -> types.CallToolResult:
    structured = result.get("structuredContent")
    if structured is None:
        raise ValueError("structuredContent missing from tool handler result")

    raw_content = result.get("content") or []
    content_items: List[TextContent] = []
    for item in raw_content:
        if isinstance(item, TextContent):
            content_items.append(item)
        elif isinstance(item, dict):
            content_items.append(TextContent(type=item.get("type", "text"), text=item.get("text", "")))

    meta = result.get("_meta")
    return types.CallToolResult(content=content_items, structuredContent=structured, _meta=meta)


# Register MCP tools

@mcp.tool(
    name="get_next_step",
    description=GET_NEXT_STEP_DESCRIPTION,
    meta={
        "openai/toolInvocation/invoking": "Looking at your budget...",
        "openai/toolInvocation/invoked": "Next step ready",
        "readOnlyHint": True
    }
)
async def get_next_step(
    context: dict,
    tone: Optional[str] = None,
    trigger: Optional[str] = None,
    encouragement: Optional[bool] = None,
) -> types.CallToolResult:
    """Pick and phrase the most useful next budgeting step"""
    result = next_step_handler(
        context=context,
        tone=tone,
        trigger=trigger,
        encouragement=encouragement,
    )
    if "structuredContent" not in result:
        raise ValueError("next_step_handler missing structuredContent")
    return build_structured_call_result(result)


# ============================================================================
# REST API ENDPOINTS FOR THE WEB APP
# ============================================================================

@mcp.custom_route("/api/next-step/options", methods=["GET"])
async def next_step_options(request: Request):
    """Tones, triggers in priority order and the configured defaults"""
    return JSONResponse({
        "tones": list(VALID_TONES),
        "triggers": [trigger.value for trigger in TRIGGER_PRIORITY],
        "defaults": {
            "tone": settings.default_tone.lower(),
            "encouragement": settings.encouragement,
        },
        "example_amount": format_money(1234.5),
    })


@mcp.custom_route("/api/next-step", methods=["POST"])
async def next_step_api(request: Request):
    """REST version of get_next_step MCP tool"""
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.warn("Next step request body is not JSON", {"error": str(e)})
        return JSONResponse(
            {"error": "Request body must be valid JSON", "error_type": ErrorType.PARSE_ERROR.value},
            status_code=400,
        )

    if not isinstance(payload, dict):
        return JSONResponse(
            {"error": "Request body must be a JSON object", "error_type": ErrorType.VALIDATION_ERROR.value},
            status_code=400,
        )

    unknown_fields = sorted(set(payload) - set(NextStepRequest.model_fields))
    if unknown_fields:
        return JSONResponse(
            {
                "error": f"Unknown fields: {', '.join(unknown_fields)}",
                "error_type": ErrorType.VALIDATION_ERROR.value,
            },
            status_code=400,
        )

    try:
        result = next_step_handler(
            context=payload.get("context"),
            tone=payload.get("tone"),
            trigger=payload.get("trigger"),
            encouragement=payload.get("encouragement"),
        )
        return JSONResponse(result["structuredContent"])

    except NextStepValidationError as e:
        return JSONResponse(
            {"error": str(e), "error_type": ErrorType.VALIDATION_ERROR.value},
            status_code=400,
        )
    except Exception as e:
        logger.error("Next step error", {"error": str(e), "error_type": classify_error(e).value})
        return JSONResponse({"error": str(e)}, status_code=500)


# Get the ASGI app from FastMCP
app = mcp.streamable_http_app()

# Add CORS middleware with configurable origins
_allowed_origins = [
    origin.strip()
    for origin in settings.allowed_origins.split(",")
    if origin.strip()
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=_allowed_origins,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
    allow_credentials=False,
)

# Export the ASGI app for uvicorn
asgi_app = app


def run() -> None:
    """Console entry point"""
    import uvicorn
    uvicorn.run(asgi_app, host="0.0.0.0", port=8000)


if __name__ == "__main__":
    run()
