"""
Utility functions
"""

import importlib.metadata
import pkgutil
from types import ModuleType


def _version(default_version="0.0.0"):
    try:
        return importlib.metadata.version("testrunreport")
    except importlib.metadata.PackageNotFoundError:
        return default_version

TESTRUNREPORT_VERSION = _version()


def find_submodules(package: ModuleType) -> list[str]:
    """
    Find all submodules in the named package

    package: the package
    return: array of module names
    """
    ret = []
    for _, modname, _ in pkgutil.iter_modules(package.__path__):
        ret.append(modname)
    return ret


def plural(count: int, singular: str, plural_form: str | None = None) -> str:
    """
    Pick the singular form if count is exactly 1, the plural form otherwise.
    The plural form defaults to the singular form with an 's' appended.
    """
    if count == 1:
        return singular
    if plural_form is None:
        return singular + 's'
    return plural_form
