# Auto-register passes on package import (e.g., when importing any submodule)
from . import passes  # noqa: F401
from .config import CleanOptions
from .core import clean

__all__: list[str] = ["CleanOptions", "clean"]
