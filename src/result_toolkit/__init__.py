"""Top-level package for the Result Toolkit.

Provides subpackages:
- result_toolkit.core – value types, the Result aggregate, schemas and serialization
- result_toolkit.ranking – dense ranking, percentiles and cross-period comparison
- result_toolkit.analytics – pass/fail, difficulty, segmentation and insights
- result_toolkit.report – combined report snapshot for storage and display
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        try:
            content = pyproject.read_text()
            for line in content.splitlines():
                if line.strip().startswith("version"):
                    # Parse: version = "0.3.1"
                    return line.split("=")[1].strip().strip('"').strip("'")
        except OSError:
            pass

    from importlib.metadata import PackageNotFoundError, version as pkg_version

    try:
        return pkg_version("result_toolkit")
    except PackageNotFoundError:
        return "0.0.0"

__version__ = _get_version()
__all__: list[str] = ["__version__"]
