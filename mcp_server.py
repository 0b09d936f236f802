"""
Swiss Legal Citations MCP Server
================================

Local MCP server that parses, validates and formats Swiss legal citations.
Runs over stdio; all work is done in-process by the swiss_citations package.

Installation:
    pip install -e .

Usage with Claude Desktop:
    claude mcp add swiss-legal-citations -- python3 /path/to/mcp_server.py

    Or in claude_desktop_config.json:
    {
      "mcpServers": {
        "swiss-legal-citations": {
          "command": "python3",
          "args": ["/path/to/mcp_server.py"]
        }
      }
    }

Tools exposed:
    parse_citation     Parse a BGE/ATF/DTF or statute citation into its
                       components (volume, section, page, article, ...).
    validate_citation  Check a citation and explain what is wrong with it,
                       with suggested fixes.
    format_citation    Render a citation in de/fr/it/en, full, short or
                       inline style.
    convert_citation   Convert a citation into a target format and language.
    extract_citations  Find all case and statute citations in running text.
"""
from __future__ import annotations

import json
import logging
import os
import sys

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool
from pydantic import ValidationError

from swiss_citations import (
    Language,
    convert_citation,
    extract_citations,
    extract_references,
    format_citation,
    parse,
    validate,
)
from swiss_citations.schemas import (
    ConvertCitationInput,
    ExtractCitationsInput,
    FormatCitationInput,
    ParseCitationInput,
    ValidateCitationInput,
)

# ── Configuration ─────────────────────────────────────────────
LOG_LEVEL = os.environ.get("SWISS_CITATIONS_LOG_LEVEL", "INFO").upper()
DEFAULT_LANGUAGE = os.environ.get("SWISS_CITATIONS_DEFAULT_LANGUAGE", "de").lower()

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
    stream=sys.stderr,  # MCP uses stdout for protocol, logs go to stderr
)
logger = logging.getLogger("swiss-citations-mcp")

if DEFAULT_LANGUAGE not in {lang.value for lang in Language}:
    logger.warning(
        f"Ignoring SWISS_CITATIONS_DEFAULT_LANGUAGE={DEFAULT_LANGUAGE!r}, using 'de'"
    )
    DEFAULT_LANGUAGE = "de"

_CITATION_TYPE = {
    "type": "string",
    "enum": ["case", "statute", "doctrine"],
}
_LANGUAGE = {
    "type": "string",
    "enum": ["de", "fr", "it", "en"],
}


def _json(data) -> list[TextContent]:
    return [TextContent(type="text", text=json.dumps(data, indent=2, ensure_ascii=False))]


# ── MCP Server ────────────────────────────────────────────────

server = Server("swiss-legal-citations")


@server.list_tools()
async def handle_list_tools() -> list[Tool]:
    return [
        Tool(
            name="parse_citation",
            description=(
                "Parse a Swiss legal citation into its components. "
                "Supports BGE/ATF/DTF decisions (e.g., BGE 145 III 229 E. 4.2) "
                "and statute provisions (e.g., Art. 8 Abs. 1 lit. a ZGB, "
                "art. 97 al. 1 CO)."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "citation": {
                        "type": "string",
                        "description": "The citation string to parse",
                    },
                    "citationType": {
                        **_CITATION_TYPE,
                        "description": "Hint for citation type. Auto-detected if not provided",
                    },
                },
                "required": ["citation"],
            },
        ),
        Tool(
            name="validate_citation",
            description=(
                "Validate a Swiss legal citation. Returns the error code, "
                "the position of the offending component where known, the "
                "canonical form of valid citations, and suggested fixes."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "citation": {
                        "type": "string",
                        "description": "The citation string to validate",
                    },
                    "citationType": {
                        **_CITATION_TYPE,
                        "description": "Expected citation type",
                    },
                },
                "required": ["citation"],
            },
        ),
        Tool(
            name="format_citation",
            description=(
                "Render a citation in another language: BGE/ATF/DTF prefix, "
                "E./consid. marker, statute connector words and statute "
                "abbreviation (e.g., OR -> CO). Styles: full, short, inline."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "citation": {
                        "type": "string",
                        "description": "The citation string to format",
                    },
                    "targetLanguage": {
                        **_LANGUAGE,
                        "description": "Target language: de, fr, it, en",
                    },
                    "style": {
                        "type": "string",
                        "enum": ["full", "short", "inline"],
                        "description": "Citation style (default: full)",
                        "default": "full",
                    },
                },
                "required": ["citation", "targetLanguage"],
            },
        ),
        Tool(
            name="convert_citation",
            description=(
                "Convert a citation to a target format and language. The "
                "citation type must match the target format."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "citation": {
                        "type": "string",
                        "description": "The citation string to convert",
                    },
                    "toFormat": {
                        **_CITATION_TYPE,
                        "description": "Target citation type",
                    },
                    "fromFormat": {
                        **_CITATION_TYPE,
                        "description": "Source citation type (auto-detected if not provided)",
                    },
                    "targetLanguage": {
                        **_LANGUAGE,
                        "description": f"Target language (default: {DEFAULT_LANGUAGE})",
                    },
                },
                "required": ["citation", "toFormat"],
            },
        ),
        Tool(
            name="extract_citations",
            description=(
                "Find every BGE/ATF/DTF and statute citation in a passage of "
                "text, with offsets and canonical forms."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "text": {
                        "type": "string",
                        "description": "Text to scan",
                    },
                    "group": {
                        "type": "string",
                        "enum": ["flat", "by_type"],
                        "description": "One list, or statutes and citations separately",
                        "default": "flat",
                    },
                },
                "required": ["text"],
            },
        ),
    ]


@server.call_tool()
async def handle_call_tool(name: str, arguments: dict) -> list[TextContent]:
    arguments = arguments or {}
    try:
        if name == "parse_citation":
            args = ParseCitationInput.model_validate(arguments)
            return _json(parse(args.citation, args.citation_type).to_dict())

        elif name == "validate_citation":
            args = ValidateCitationInput.model_validate(arguments)
            return _json(validate(args.citation, args.citation_type).to_dict())

        elif name == "format_citation":
            args = FormatCitationInput.model_validate(arguments)
            result = format_citation(args.citation, args.target_language, args.style)
            return _json(result.to_dict())

        elif name == "convert_citation":
            args = ConvertCitationInput.model_validate(arguments)
            result = convert_citation(
                args.citation,
                args.to_format,
                args.from_format,
                args.target_language or DEFAULT_LANGUAGE,
            )
            return _json(result.to_dict())

        elif name == "extract_citations":
            args = ExtractCitationsInput.model_validate(arguments)
            if args.group == "by_type":
                return _json(extract_references(args.text))
            return _json([c.to_dict() for c in extract_citations(args.text)])

        else:
            return [TextContent(type="text", text=f"Unknown tool: {name}")]

    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'arguments'}: {err['msg']}"
            for err in e.errors()
        )
        return [TextContent(type="text", text=f"Invalid arguments for {name}: {problems}")]
    except Exception as e:
        logger.error(f"Tool error {name}: {e}", exc_info=True)
        return [TextContent(type="text", text=f"Error: {e}")]


# ── Main ──────────────────────────────────────────────────────

async def main():
    logger.info("Swiss Legal Citations MCP Server starting")
    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )


if __name__ == "__main__":
    import asyncio
    asyncio.run(main())
