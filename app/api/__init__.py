
from . import compress, files, info

routers = [
    compress.router,
    files.router,
    info.router,
]

__all__ = [
    "routers",
]
