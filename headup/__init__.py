"""Keep header metadata (timestamps, sizes, paths) fresh when files are saved."""

from headup.app import Headup

__version__ = "0.1.0"

__all__ = ["Headup", "__version__"]
