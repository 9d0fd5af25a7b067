"""Export the ENS connection graph from the database to a JSON file."""

from __future__ import annotations

import asyncio
import json
import sys

from ensgraph.api.v1.graph import to_graph_response
from ensgraph.config import get_settings
from ensgraph.db.connection import Database
from ensgraph.services.graph_service import GraphService
from ensgraph.utils.logging import setup_logging


async def main() -> None:
    setup_logging(log_level="INFO", log_format="console")
    settings = get_settings()

    db = Database(settings)
    await db.connect()

    try:
        nodes, edges = await GraphService(db).list_graph()
        if not nodes:
            print("No graph data found.")
            sys.exit(0)

        output = to_graph_response(nodes, edges).model_dump(by_alias=True)
        filename = sys.argv[1] if len(sys.argv) > 1 else "graph_export.json"
        with open(filename, "w") as f:
            json.dump(output, f, indent=2)
        print(f"Graph exported to {filename}")
        print(f"  Nodes: {len(output['nodes'])}")
        print(f"  Links: {len(output['links'])}")
    finally:
        await db.close()


if __name__ == "__main__":
    asyncio.run(main())
