from verifykit.utils.async_bridge import is_awaitable, run_sync
from verifykit.utils.logger import logger
from verifykit.utils.text import normalized
from verifykit.utils.uri import is_well_formed_uri

__all__ = [
    "logger",
    "run_sync",
    "is_awaitable",
    "is_well_formed_uri",
    "normalized",
]
