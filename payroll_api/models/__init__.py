# payroll_api/models/__init__.py
import importlib
import pkgutil
import pathlib

_EXCLUDE_PREFIXES = (
    "payroll_api.models.__pycache__",
    "payroll_api.models.tests",
)


def load_all():
    """Import every .py in this package so all models register on db.metadata."""
    pkg_path = pathlib.Path(__file__).parent
    for mod in pkgutil.iter_modules([str(pkg_path)]):
        full = f"{__name__}.{mod.name}"
        if full.startswith(_EXCLUDE_PREFIXES):
            continue
        importlib.import_module(full)
