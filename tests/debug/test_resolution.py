"""ResolutionRecord / ResolutionLedger 测试"""

import pytest

from bootkernel.debug import ResolutionLedger, ResolutionRecord
from bootkernel.kernel.definition import ServiceDefinition


def make_definitions(*specs):
    """(id, aliases) 元组 -> 定义表"""
    return {
        service_id: ServiceDefinition(id=service_id, factory=object, aliases=tuple(aliases))
        for service_id, aliases in specs
    }


class TestResolutionRecord:
    """ResolutionRecord 测试"""

    def test_starts_at_zero(self):
        record = ResolutionRecord("foo")

        assert record.id == "foo"
        assert record.resolution_count == 0
        assert record.resolution_time == 0.0

    def test_mutators_are_chainable(self):
        record = ResolutionRecord("foo")

        result = record.increment_resolution_count().add_resolution_time(0.5)

        assert result is record
        assert record.resolution_count == 1
        assert record.resolution_time == pytest.approx(0.5)

    def test_counters_accumulate(self):
        record = ResolutionRecord("foo")

        for _ in range(3):
            record.increment_resolution_count().add_resolution_time(0.25)

        assert record.resolution_count == 3
        assert record.resolution_time == pytest.approx(0.75)

    def test_debug_info(self):
        record = ResolutionRecord("foo").increment_resolution_count().add_resolution_time(0.1)

        assert record.debug_info() == {
            "foo": {"resolutionCount": 1, "totalResolutionTime": pytest.approx(0.1)}
        }


class TestResolutionLedger:
    """ResolutionLedger 测试"""

    def test_all_definitions_start_unresolved(self):
        ledger = ResolutionLedger(make_definitions(("a", []), ("b", [])))

        assert ledger.unresolved_services() == ["a", "b"]
        assert ledger.resolved_services() == {}

    def test_first_resolution_creates_record(self):
        ledger = ResolutionLedger(make_definitions(("a", []), ("b", [])))

        record = ledger.resolve("a", 0.01)

        assert record.id == "a"
        assert record.resolution_count == 1
        assert ledger.unresolved_services() == ["b"]

    def test_repeated_resolution_reuses_record(self):
        ledger = ResolutionLedger(make_definitions(("a", [])))

        first = ledger.resolve("a", 0.01)
        second = ledger.resolve("a", 0.02)

        assert first is second
        assert second.resolution_count == 2
        assert second.resolution_time == pytest.approx(0.03)

    def test_alias_and_id_share_one_record(self):
        ledger = ResolutionLedger(make_definitions(("a", ["A1"]), ("b", [])))

        ledger.resolve("A1", 0.01)
        ledger.resolve("a", 0.01)

        resolved = ledger.resolved_services()
        assert list(resolved) == ["a"]
        assert resolved["a"]["resolutionCount"] == 2
        assert ledger.unresolved_services() == ["b"]

    def test_resolved_id_never_returns_to_unresolved(self):
        ledger = ResolutionLedger(make_definitions(("a", ["A1"]), ("b", [])))

        ledger.resolve("A1", 0.0)
        ledger.resolve("a", 0.0)
        ledger.resolve("b", 0.0)

        assert ledger.unresolved_services() == []

    def test_known_ids_partitioned(self):
        """已解析与未解析集合的并集始终等于定义集合"""
        definitions = make_definitions(("a", ["A1"]), ("b", []), ("c", ["C1", "C2"]))
        ledger = ResolutionLedger(definitions)

        for name in ["C2", "a", "C1", "A1"]:
            ledger.resolve(name, 0.0)
            resolved = set(ledger.resolved_services())
            unresolved = set(ledger.unresolved_services())
            assert resolved | unresolved == set(definitions)
            assert not resolved & unresolved

    def test_extra_aliases_are_not_tracked_as_unresolved(self):
        ledger = ResolutionLedger(
            make_definitions(("a", [])),
            aliases={"KernelInterface": "kernel"},
        )

        assert ledger.unresolved_services() == ["a"]

        ledger.resolve("KernelInterface", 0.0)
        ledger.resolve("kernel", 0.0)

        assert ledger.get("kernel").resolution_count == 2
        assert ledger.unresolved_services() == ["a"]

    def test_unknown_id_is_recorded(self):
        ledger = ResolutionLedger({})

        ledger.resolve("adhoc", 0.0)

        assert ledger.get("adhoc").resolution_count == 1

    def test_get_by_alias(self):
        ledger = ResolutionLedger(make_definitions(("a", ["A1"])))

        assert ledger.get("A1") is None

        ledger.resolve("a", 0.0)

        assert ledger.get("A1") is ledger.get("a")
        assert ledger.canonical_id("A1") == "a"

    def test_debug_info(self):
        ledger = ResolutionLedger(make_definitions(("a", ["A1"]), ("b", [])))

        ledger.resolve("A1", 0.5)

        assert ledger.debug_info() == {
            "resolved": {"a": {"resolutionCount": 1, "totalResolutionTime": pytest.approx(0.5)}},
            "unresolved": ["b"],
        }
