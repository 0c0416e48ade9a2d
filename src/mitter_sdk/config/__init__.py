"""SDK configuration"""

import logging
from dotenv import load_dotenv

from .loader import load_raw_config
from .core import Core
from .pagination import Pagination
from .multipart import Multipart

load_dotenv()

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s]: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logging.basicConfig(format=LOG_FORMAT, datefmt=DATE_FORMAT, level=logging.INFO)
logging.getLogger("aiohttp").setLevel(logging.WARNING)

_RAW_CONFIG = load_raw_config()

core = Core(_RAW_CONFIG)
pagination = Pagination(_RAW_CONFIG)
multipart = Multipart(_RAW_CONFIG)


class Config:
    core = core
    pagination = pagination
    multipart = multipart


__all__ = ["core", "pagination", "multipart", "Config"]
