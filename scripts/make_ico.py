from __future__ import annotations

import sys
from pathlib import Path

from favicon_collection.config import ICO_FRAME_SIZES
from favicon_collection.services.ico_service import IcoConverter


def main() -> int:
    if len(sys.argv) != 3:
        print('Usage: make_ico.py <src_image> <dst_ico>')
        return 2

    src = Path(sys.argv[1]).resolve()
    dst = Path(sys.argv[2]).resolve()
    dst.parent.mkdir(parents=True, exist_ok=True)

    converter = IcoConverter()
    converter.add_image(src, ICO_FRAME_SIZES)
    if not converter.save_ico(dst):
        print(f'Failed to write {dst}')
        return 1

    print(f'Wrote {dst} ({", ".join(f"{w}x{h}" for w, h in converter.frame_sizes)})')
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
