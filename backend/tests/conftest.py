import pytest

from samples import build_catalog


@pytest.fixture
def catalog(tmp_path):
    """Path of a populated catalog directory."""
    return build_catalog(tmp_path / "interfacedesign")


@pytest.fixture
def catalog_roots(tmp_path, monkeypatch):
    """Instance and template roots with one populated instance ``demo``."""
    from interfacedesign.core.config import settings

    instances = tmp_path / "instances"
    templates = tmp_path / "templates"
    build_catalog(instances / "demo" / "interfacedesign")
    (instances / "empty" / "interfacedesign").mkdir(parents=True)
    (templates / "_drafts").mkdir(parents=True)

    monkeypatch.setattr(settings, "INSTANCES_ROOT", str(instances))
    monkeypatch.setattr(settings, "TEMPLATES_ROOT", str(templates))
    monkeypatch.setattr(settings, "DEFAULT_TEMPLATE", "bsi-tr-03153-03151")
    return instances, templates
