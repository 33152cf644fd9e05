import logging

import uvicorn

from homepantry.api.api_run import app
from homepantry.utilities.config import APP_HOST, APP_PORT, LOG_LEVEL, DATA_DIR
from homepantry.utilities.network import server_urls


def main():
    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logger = logging.getLogger("homepantry")
    logger.info("Household data in %s", DATA_DIR)
    for url in server_urls(APP_HOST, APP_PORT):
        logger.info("HomePantry API available at %s", url)
    uvicorn.run(app, host=APP_HOST, port=APP_PORT, log_level=LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
