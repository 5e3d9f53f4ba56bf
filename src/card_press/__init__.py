"""Top-level package for Card Press.

Provides subpackages:
- card_press.core – data models (dimensions, templates, cards, assets)
- card_press.assets – content-addressed asset store and persistence
- card_press.builder – layout and PDF generation engine
- card_press.catalog – bundled templates
- card_press.sources – card list import adapters
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        try:
            for line in pyproject.read_text().splitlines():
                if line.strip().startswith("version"):
                    # version = "0.1.0"
                    return line.split("=")[1].strip().strip('"').strip("'")
        except OSError:
            pass

    from importlib.metadata import PackageNotFoundError, version as pkg_version

    try:
        return pkg_version("card-press")
    except PackageNotFoundError:
        return "0.0.0"

__version__ = _get_version()
__all__: list[str] = ["__version__"]
