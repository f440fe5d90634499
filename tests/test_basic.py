import importlib


def test_package_importable():
    """Ensure the flarematch package can be imported without side-effects."""
    pkg = importlib.import_module("flarematch")
    assert hasattr(pkg, "logger")
    assert pkg.logger.name == "flarematch"


def test_public_modules_importable():
    for name in ("config", "errors", "numeric", "geo", "matcher", "regression",
                 "table_io", "pipeline", "report", "cli"):
        importlib.import_module(f"flarematch.{name}")
