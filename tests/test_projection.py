# tests/test_projection.py
import pytest
from hypothesis import given, strategies as st

from propsim.analysis.projection import (
    PALETTE,
    build_projections,
    project_value,
    projection_frame,
    projection_years,
)
from propsim.domain.scenario import PropertyScenario


def test_five_year_compounding(scenario_factory):
    s = scenario_factory(purchase_price=100_000.0, appreciation_rate=0.05)
    values = project_value(s, projection_years())

    assert len(values) == 6
    assert values[0] == pytest.approx(100_000.0)
    assert values[1] == pytest.approx(105_000.0)
    assert values[5] == pytest.approx(127_628.15625, rel=1e-12)


def test_series_labels_and_palette_wrap(scenario_factory):
    scenarios = [scenario_factory(purchase_price=100_000.0 + i) for i in range(8)]
    series = build_projections(scenarios)

    assert [s.label for s in series][:3] == ["Property 1", "Property 2", "Property 3"]
    assert series[0].color == PALETTE[0]
    assert series[6].color == PALETTE[0]
    assert series[7].color == PALETTE[1]
    assert all(s.years == [0, 1, 2, 3, 4, 5] for s in series)


def test_removal_shifts_colours_of_later_scenarios(scenario_factory):
    a, b, c = (scenario_factory(purchase_price=p) for p in (1.0, 2.0, 3.0))
    before = build_projections([a, b, c])
    after = build_projections([a, c])

    assert after[1].color == before[1].color
    assert after[1].color != before[2].color
    assert after[1].values == before[2].values


def test_horizon_is_configurable(scenario_factory):
    series = build_projections([scenario_factory()], horizon=10)
    assert series[0].years == list(range(11))
    assert len(series[0].values) == 11


def test_projection_frame_layout(scenario_factory):
    scenarios = [
        scenario_factory(purchase_price=100_000.0, appreciation_rate=0.05),
        scenario_factory(purchase_price=200_000.0, appreciation_rate=0.0),
    ]
    df = projection_frame(scenarios)

    assert list(df.columns) == ["Property 1", "Property 2"]
    assert list(df.index) == [0, 1, 2, 3, 4, 5]
    assert df.index.name == "year"
    assert df.loc[5, "Property 1"] == pytest.approx(127_628.15625)
    assert (df["Property 2"] == 200_000.0).all()


def test_no_scenarios_no_series():
    assert build_projections([]) == []
    assert projection_frame([]).empty


@given(
    price=st.floats(min_value=1_000.0, max_value=5_000_000.0),
    rate=st.floats(min_value=0.0, max_value=0.5),
)
def test_projection_starts_at_price_and_never_falls(price, rate):
    s = PropertyScenario.from_defaults().model_copy(
        update={"purchase_price": price, "appreciation_rate": rate}
    )
    values = project_value(s, projection_years())

    assert values[0] == pytest.approx(price)
    assert all(b >= a for a, b in zip(values, values[1:]))
