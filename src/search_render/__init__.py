"""Server-rendered search results for clients without JavaScript."""

__version__ = "0.1.0"

from .config import WebConfig  # noqa: E402

__all__ = ["WebConfig", "__version__"]
