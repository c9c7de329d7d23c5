"""Unit tests for fields and the field registry."""

import threading

import pytest

from ctxlog import BUILTIN_FIELDS, FIELD_SOURCE_LINE, Field, FieldRegistry


class TestField:
    def test_field_equals_plain_string(self) -> None:
        """Test a field and a str with the same value are interchangeable keys."""
        assert Field("asset") == "asset"
        assert hash(Field("asset")) == hash("asset")
        assert {"asset": 1}[Field("asset")] == 1

    def test_field_repr(self) -> None:
        """Test repr distinguishes fields from strings."""
        assert repr(Field("asset")) == "Field('asset')"

    def test_builtin_fields(self) -> None:
        """Test the four built-in field tokens."""
        assert [str(f) for f in BUILTIN_FIELDS] == [
            "source_file",
            "source_line",
            "caller",
            "stack_trace",
        ]


class TestFieldRegistry:
    def test_starts_empty(self) -> None:
        """Test a registry without initial fields is empty."""
        assert list(FieldRegistry()) == []

    def test_register_sorts(self) -> None:
        """Test fields are kept in lexicographic order."""
        registry = FieldRegistry()
        registry.register("zeta", "alpha", "mid")

        assert list(registry) == ["alpha", "mid", "zeta"]

    def test_register_is_idempotent(self) -> None:
        """Test registering a field twice keeps one occurrence."""
        registry = FieldRegistry()
        registry.register("asset")
        registry.register("asset", "asset")

        assert list(registry) == ["asset"]
        assert len(registry) == 1

    def test_registered_values_are_fields(self) -> None:
        """Test plain strings are converted to Field tokens."""
        registry = FieldRegistry(["asset"])

        assert all(isinstance(f, Field) for f in registry)

    def test_unregister_present_field(self) -> None:
        """Test unregistering removes exactly that field."""
        registry = FieldRegistry(BUILTIN_FIELDS)
        registry.unregister(FIELD_SOURCE_LINE)

        assert FIELD_SOURCE_LINE not in registry
        assert list(registry) == ["caller", "source_file", "stack_trace"]

    def test_unregister_absent_field_is_noop(self) -> None:
        """Test unregistering an unknown field changes nothing."""
        registry = FieldRegistry(["asset", "component"])
        before = registry.snapshot()

        registry.unregister("missing")

        assert registry.snapshot() is before

    def test_unregister_several(self) -> None:
        """Test several fields can be removed in one call."""
        registry = FieldRegistry(["a", "b", "c", "d"])
        registry.unregister("d", "a", "x")

        assert list(registry) == ["b", "c"]

    def test_register_after_unregister(self) -> None:
        """Test a field can be added back after removal."""
        registry = FieldRegistry(["asset"])
        registry.unregister("asset")
        registry.register("asset")

        assert list(registry) == ["asset"]

    def test_snapshot_is_not_affected_by_later_mutation(self) -> None:
        """Test a taken snapshot stays complete while the registry changes."""
        registry = FieldRegistry(["b"])
        snapshot = registry.snapshot()

        registry.register("a", "c")
        registry.unregister("b")

        assert snapshot == ("b",)
        assert list(registry) == ["a", "c"]

    @pytest.mark.slow
    def test_concurrent_registration(self) -> None:
        """Test concurrent registration never produces duplicates."""
        registry = FieldRegistry()
        names = [f"field_{i:03d}" for i in range(50)]

        def worker() -> None:
            for name in names:
                registry.register(name)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert list(registry) == names
