"""ServiceContainer 测试"""

import functools
import threading
from collections import deque

import pytest

from bootkernel.kernel import ServiceContainer, ServiceNotFoundError
from bootkernel.kernel.container import Lifecycle


@pytest.fixture
def container():
    return ServiceContainer()


class TestRegistration:
    """注册与查询"""

    def test_has_registered_id(self, container):
        container.add("foo", lambda: "bar")

        assert container.has("foo") is True
        assert container.has("missing") is False

    def test_has_alias(self, container):
        container.add("foo", lambda: "bar")
        container.add_alias("foo", "Foo")

        assert container.has("Foo") is True
        assert container.aliases() == {"Foo": "foo"}

    def test_alias_to_unregistered_id_is_not_available(self, container):
        container.add_alias("ghost", "Ghost")

        assert container.has("Ghost") is False

    def test_ids_in_registration_order(self, container):
        container.add("b", object)
        container.add("a", object)

        assert container.ids() == ["b", "a"]

    def test_readd_replaces_descriptor(self, container):
        container.add("foo", lambda: "first", shared=True)
        container.get("foo")
        container.add("foo", lambda: "second", shared=True)

        assert container.get("foo") == "second"


class TestResolution:
    """解析"""

    def test_unknown_id_raises(self, container):
        with pytest.raises(ServiceNotFoundError, match="missing") as exc_info:
            container.get("missing")

        assert exc_info.value.identifier == "missing"

    def test_not_found_is_a_key_error(self, container):
        with pytest.raises(KeyError):
            container.get("missing")

    def test_shared_service_is_cached(self, container):
        container.add("foo", object, shared=True)

        assert container.get("foo") is container.get("foo")

    def test_transient_service_is_rebuilt(self, container):
        container.add("foo", object, shared=False)

        assert container.get("foo") is not container.get("foo")

    def test_alias_resolves_same_shared_instance(self, container):
        container.add("foo", object, shared=True)
        container.add_alias("foo", "Foo")

        assert container.get("Foo") is container.get("foo")

    def test_shared_none_is_cached(self, container):
        calls = []

        def factory():
            calls.append(1)
            return None

        container.add("nothing", factory, shared=True)

        assert container.get("nothing") is None
        assert container.get("nothing") is None
        assert calls == [1]

    def test_factory_receives_container(self, container):
        container.add("base", lambda: 2, shared=True)
        container.add("double", lambda c: c.get("base") * 2)

        assert container.get("double") == 4

    @pytest.mark.parametrize("factory", [list, set, dict, deque])
    def test_builtin_types_called_without_container(self, container, factory):
        container.add("items", factory, shared=True)

        assert container.get("items") == factory()

    def test_optional_parameter_not_filled_with_container(self, container):
        def factory(size=3):
            return [0] * size

        container.add("zeros", factory)

        assert container.get("zeros") == [0, 0, 0]

    def test_partial_without_remaining_arguments(self, container):
        container.add("pair", functools.partial(tuple, "ab"))

        assert container.get("pair") == ("a", "b")

    def test_factory_failure_propagates(self, container):
        def broken():
            raise RuntimeError("boom")

        container.add("broken", broken, shared=True)

        with pytest.raises(RuntimeError, match="boom"):
            container.get("broken")

    def test_failed_shared_factory_is_retried(self, container):
        attempts = []

        def flaky():
            attempts.append(1)
            if len(attempts) == 1:
                raise RuntimeError("first attempt")
            return "ok"

        container.add("flaky", flaky, shared=True)

        with pytest.raises(RuntimeError):
            container.get("flaky")
        assert container.get("flaky") == "ok"

    def test_shared_service_built_once_across_threads(self, container):
        built = []
        barrier = threading.Barrier(6)

        def factory():
            built.append(1)
            return object()

        container.add("foo", factory, shared=True)
        results = []

        def worker():
            barrier.wait()
            results.append(container.get("foo"))

        threads = [threading.Thread(target=worker) for _ in range(6)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(built) == 1
        assert all(r is results[0] for r in results)


class TestLifecycle:
    """生命周期映射"""

    def test_shared_maps_to_singleton(self, container):
        container.add("foo", object, shared=True)

        assert container._registry["foo"].lifecycle is Lifecycle.SINGLETON

    def test_default_is_transient(self, container):
        container.add("foo", object)

        assert container._registry["foo"].lifecycle is Lifecycle.TRANSIENT
