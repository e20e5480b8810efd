"""Tests for BaseService and plugin hook dispatch."""

import pluggy
import pytest

from kglcore.domain.ontology import Ontology
from kglcore.plugins.manager import PluginManager
from kglcore.services.base import BaseService
from kglcore.services.gateway import ValidationGateway

hookimpl = pluggy.HookimplMarker("kglcore")


class _Recorder:
    @hookimpl
    def post_checkpoint(self, stage, passed, errors_found, warnings_found):
        return None


class _Exporter:
    @hookimpl
    def validate_export(self, modules, taxonomies):
        return [{"message": "one"}]


class _Failing:
    @hookimpl
    def validate_export(self, modules, taxonomies):
        raise RuntimeError("exporter crashed")


class TestBaseService:
    def test_ontology_stored(self, ontology: Ontology) -> None:
        service = BaseService(ontology)
        assert service.ontology is ontology

    def test_subclass_pattern(self, ontology: Ontology) -> None:
        class MyService(BaseService):
            def node_count(self) -> int:
                return len(self._ontology.vocabulary)

        assert MyService(ontology).node_count() == 45

    def test_gateway_inherits(self) -> None:
        assert issubclass(ValidationGateway, BaseService)


class TestCallHook:
    def test_no_plugins_returns_empty(self, ontology: Ontology) -> None:
        warnings: list[str] = []
        result = BaseService(ontology)._call_hook(
            "validate_export", {"modules": [], "taxonomies": []}, warnings
        )
        assert result == []
        assert warnings == []

    def test_none_results_dropped(self, ontology: Ontology) -> None:
        pm = PluginManager()
        pm.register_plugin(_Recorder())
        warnings: list[str] = []
        result = BaseService(ontology, pm)._call_hook(
            "post_checkpoint",
            {"stage": "map", "passed": True, "errors_found": 0, "warnings_found": 0},
            warnings,
        )
        assert result == []

    def test_results_collected(self, ontology: Ontology) -> None:
        pm = PluginManager()
        pm.register_plugin(_Exporter())
        warnings: list[str] = []
        result = BaseService(ontology, pm)._call_hook(
            "validate_export", {"modules": [], "taxonomies": []}, warnings
        )
        assert result == [[{"message": "one"}]]

    def test_failure_becomes_warning(
        self, ontology: Ontology, caplog: pytest.LogCaptureFixture
    ) -> None:
        pm = PluginManager()
        pm.register_plugin(_Failing())
        warnings: list[str] = []
        with caplog.at_level("WARNING"):
            result = BaseService(ontology, pm)._call_hook(
                "validate_export", {"modules": [], "taxonomies": []}, warnings
            )
        assert result == []
        assert warnings == ["Plugin hook validate_export failed"]
        assert "Plugin hook validate_export failed" in caplog.text
