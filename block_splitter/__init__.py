# Importing the package registers the core passes with the framework.
from . import passes  # noqa: F401

__all__: list[str] = []
