# cdkrun/utils/logger.py
import logging

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s - %(message)s")

def log_info(msg: str):
    logging.info(msg)

def log_error(msg: str):
    logging.error(msg)
