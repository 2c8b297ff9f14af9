"""Afaq Al-ʿIlm portal client: curriculum, teacher portal, uploads and assistant."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("afaq-portal")
except PackageNotFoundError:
    __version__ = "0+unknown"
