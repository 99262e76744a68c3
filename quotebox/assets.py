"""Readers for the quote asset and the errors they raise."""

from collections.abc import Callable
from pathlib import Path

from quotebox.util import QUOTES_ASSET

_DATA_DIR = Path(__file__).resolve().parent / "data"

Reader = Callable[[], str]


class AssetError(Exception):
    """Base class for quote asset read failures."""


class ResourceMissing(AssetError):
    """Raised when the asset does not exist."""


class ResourceUnreadable(AssetError):
    """Raised when the asset exists but cannot be read or decoded."""


def read_text_file(path: Path) -> str:
    """Read *path* as UTF-8 text, mapping failures to AssetError subclasses."""
    if not path.is_file():
        raise ResourceMissing(f"{path} does not exist.")
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ResourceUnreadable(f"{path} is not valid UTF-8: {e}") from e
    except OSError as e:
        raise ResourceUnreadable(f"{path}: {e}") from e


def file_reader(path: Path | str) -> Reader:
    """Return a reader bound to *path*."""
    p = Path(path)
    return lambda: read_text_file(p)


def bundled_reader(name: str = QUOTES_ASSET) -> Reader:
    """Return a reader for an asset shipped in quotebox/data/."""
    return file_reader(_DATA_DIR / name)
