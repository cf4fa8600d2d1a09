"""Run the bridge server: ``python -m opendental_bridge``."""

import logging

import uvicorn

from opendental_bridge.config import LOG_LEVEL, PORT

logger = logging.getLogger("opendental_bridge")


def main() -> None:
    logging.basicConfig(
        level=LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("OpenDental bridge running on port %d", PORT)
    uvicorn.run("opendental_bridge.app:app", host="0.0.0.0", port=PORT)


if __name__ == "__main__":
    main()
