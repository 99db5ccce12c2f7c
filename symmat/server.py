"""symmat: exact matrix MCP server.

Run:   uv run python -m symmat.server
Test:  uv run mcp dev symmat/server.py
"""

import logging
import os

from mcp.server.fastmcp import FastMCP
from symmat.tools.matrix import matrix_tool

LOG_LEVEL = os.environ.get("SYMMAT_LOG_LEVEL", "WARNING").upper()

mcp = FastMCP(
    name="symmat",
    instructions=(
        "You have access to an exact symbolic matrix tool. "
        "Use it for determinants, inverses, ranks, linear systems and characteristic "
        "polynomials of matrices with rational or symbolic entries. Be concise."
    ),
)

mcp.tool()(matrix_tool)

if __name__ == "__main__":
    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    mcp.run()
