from __future__ import annotations

import asyncio
import json
import sys

from fresh_powder.config import app_config
from fresh_powder.logging import setup_logging
from fresh_powder.resorts import all_resorts, coldest_first
from fresh_powder.services.refresh import normalize_all


def main() -> int:
    setup_logging(app_config.logging)
    resorts = asyncio.run(normalize_all(all_resorts()))
    json.dump([resort.to_dict() for resort in coldest_first(resorts)], sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
