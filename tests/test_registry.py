import importlib
from collections.abc import Iterable
from typing import Any

import numpy as np
import pytest

from gammakit.distributions import (
    STANDARD_DISTRIBUTIONS,
    clear_registry,
    get_distribution,
    list_distributions,
    register_distribution,
)
from gammakit.distributions import base as base_registry


def _constant_sampler(value: float, engine: Any = None) -> float:
    return value


def _reload_registry() -> None:
    """Reload the distributions module to restore built-ins after tests."""
    import gammakit.distributions as dist_module

    importlib.reload(dist_module)


class _DummyEntryPoint:
    def __init__(self, name: str, obj: Any) -> None:
        self.name = name
        self._obj = obj

    def load(self) -> Any:
        return self._obj


def _make_entry_points(result: Iterable[_DummyEntryPoint]) -> Any:
    class _EntryPoints(list):
        def __init__(self, values: Iterable[_DummyEntryPoint]) -> None:
            super().__init__(values)

        def select(self, *, group: str) -> list[_DummyEntryPoint]:
            return list(self)

    return _EntryPoints(result)


def test_default_registry_contains_core_distributions() -> None:
    names = list(list_distributions())
    assert {"gamma", "chisq", "f"} <= set(names)
    assert get_distribution("Gamma").parameters == ("shape", "scale")
    assert get_distribution("f").quantile is None
    assert len(STANDARD_DISTRIBUTIONS) == 3


def test_unknown_distribution_raises() -> None:
    with pytest.raises(KeyError):
        get_distribution("beta")


def test_duplicate_registration_rejected() -> None:
    with pytest.raises(ValueError):
        register_distribution(get_distribution("gamma"))


def test_bind_orders_and_validates_parameters() -> None:
    gamma = get_distribution("gamma")
    assert gamma.bind({"shape": 2}) == (2.0, 1.0)
    assert gamma.bind({"scale": 3.0, "shape": 2.0}) == (2.0, 3.0)
    with pytest.raises(ValueError, match="Missing"):
        get_distribution("f").bind({"df1": 3.0})
    with pytest.raises(ValueError, match="Unknown"):
        gamma.bind({"shape": 2.0, "rate": 1.0})


def test_distribution_sample_is_reproducible() -> None:
    f_dist = get_distribution("f")
    first = f_dist.sample({"df1": 5.0, "df2": 20.0}, 50, random_state=4)
    second = f_dist.sample({"df1": 5.0, "df2": 20.0}, 50, random_state=4)
    assert first.shape == (50,)
    assert np.array_equal(first, second)


def test_entry_point_registration(monkeypatch: pytest.MonkeyPatch) -> None:
    clear_registry()

    demo = base_registry.Distribution(
        name="entrypoint_demo",
        parameters=("value",),
        sampler=_constant_sampler,
        notes="Entry-point supplied distribution.",
    )

    monkeypatch.setattr(
        base_registry.metadata,
        "entry_points",
        lambda: _make_entry_points([_DummyEntryPoint("demo", lambda: [demo])]),
    )

    assert base_registry.load_entry_points() == ["entrypoint_demo"]
    assert "entrypoint_demo" in list_distributions()
    draws = get_distribution("entrypoint_demo").sample({"value": 2.5}, 3, random_state=0)
    assert np.allclose(draws, 2.5)

    _reload_registry()
