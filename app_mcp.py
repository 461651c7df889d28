"""Composable MCP server hosting the IBAN service."""
from __future__ import annotations

import os

import uvicorn

from mcp_framework import ServiceDefinition, attach_request_logger, create_mcp_server, log_interaction
from services import register_iban_service

APP_NAME = os.getenv("IBAN_MCP_APP_NAME", "iban-suite")
HOST = os.getenv("IBAN_MCP_HOST", "127.0.0.1")
PORT = int(os.getenv("IBAN_MCP_PORT", "8000"))
LOG_LEVEL = os.getenv("IBAN_MCP_LOG_LEVEL", "info").lower()
JSON_RESPONSE = os.getenv("IBAN_MCP_JSON_RESPONSE", "1").strip().lower() not in {"0", "false", "no"}

services = [
    ServiceDefinition(
        name="iban",
        description="Validate, build, format and generate IBANs.",
        register=register_iban_service,
    ),
]

mcp, http_app = create_mcp_server(services, app_name=APP_NAME, json_response=JSON_RESPONSE)
attach_request_logger(http_app)

log_interaction("startup", {"services": [service.name for service in services]}, {"app": APP_NAME})


if __name__ == "__main__":
    uvicorn.run(http_app, host=HOST, port=PORT, log_level=LOG_LEVEL)
