from __future__ import annotations

from favicon_collection.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
