from importlib.metadata import PackageNotFoundError, version


def _detect_version() -> str:
    """
    Detect sift version.

    Falls back to a development placeholder if the package metadata
    is not available (e.g. running from a source checkout).
    """
    try:
        return version("sift")
    except PackageNotFoundError:
        return "0.0.0-dev"


__version__ = _detect_version()
