import logging
import sys
from logging.handlers import TimedRotatingFileHandler
import os

import uvicorn

from config import Config

logger = logging.getLogger(__name__)

# Configure logging with both console and file handlers
def setup_logging(config: Config):
    # Create logs directory if it doesn't exist
    os.makedirs(config.log_dir, exist_ok=True)

    # Create formatter
    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    # Set up root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(config.log_level)

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(config.log_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # File handler rotated at midnight
    file_handler = TimedRotatingFileHandler(
        filename=os.path.join(config.log_dir, 'catalog.log'),
        when='midnight',
        interval=1,
        backupCount=config.log_backup_count,
        encoding='utf-8'
    )
    file_handler.setLevel(config.log_level)
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)

def main():
    config = Config.load()
    error = config.validate()
    if error:
        print(f"Config error: {error}", file=sys.stderr)
        sys.exit(1)

    setup_logging(config)
    logger.info(f"Starting catalog viewer on http://{config.host}:{config.port} (source: {config.catalog_source})")

    from api.main import create_app
    app = create_app(config)

    # log_config=None keeps uvicorn on the handlers configured above
    uvicorn.run(app, host=config.host, port=config.port, log_config=None)

if __name__ == "__main__":
    main()
