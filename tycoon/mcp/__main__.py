"""CLI entry point: python -m tycoon.mcp <user_id> [save_dir]"""

from __future__ import annotations

import logging
import sys

_DEFAULT_SAVE_DIR = ".tycoon_saves"


def main() -> None:
    if len(sys.argv) < 2:
        print("Usage: python -m tycoon.mcp <user_id> [save_dir]", file=sys.stderr)
        print("Example: python -m tycoon.mcp alice ./saves", file=sys.stderr)
        sys.exit(1)

    user_id = sys.argv[1]
    save_dir = sys.argv[2] if len(sys.argv) > 2 else _DEFAULT_SAVE_DIR

    # stdout carries the protocol; logs go to stderr
    logging.basicConfig(level=logging.INFO, stream=sys.stderr)

    from tycoon.mcp.server import create_server
    from tycoon.session import GameSession
    from tycoon.store import JsonFileStore

    session = GameSession(user_id, JsonFileStore(save_dir))
    session.start()

    server = create_server(session)
    server.run(transport="stdio")


if __name__ == "__main__":
    main()
