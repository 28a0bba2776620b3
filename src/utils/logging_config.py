import logging
import os

from paths import LOGS_DIR

def setup_logging(level: str = "INFO", log_file: str | None = None):
    """Configure logging for the project"""
    log_file = log_file or os.path.join(LOGS_DIR, 'scraper.log')
    os.makedirs(os.path.dirname(log_file) or '.', exist_ok=True)
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(log_file, encoding='utf-8'),
            logging.StreamHandler()
        ],
        force=True,
    )
    return logging.getLogger(__name__)
