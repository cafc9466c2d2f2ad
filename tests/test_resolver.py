import numpy as np
import pandas as pd
import pytest

from conftest import make_dataset
from highlightsync.controller.events import ClickEvent
from highlightsync.plotting.resolver import (
    FieldBinding,
    FieldBindingError,
    NearestPointResolver,
    resolve,
    validate_bindings,
)


def click(x, y):
    return ClickEvent(view="plot1", x=x, y=y)


def test_resolves_nearest_series(three_series):
    assert resolve(three_series, click(2, 4.8), "rowid", "value", 1.0) == "V30"
    assert resolve(three_series, click(1, 0.9), "rowid", "value", 1.0) == "V2"


def test_outside_max_distance_is_none(three_series):
    assert resolve(three_series, click(2, 50.0), "rowid", "value", 1.0) is None


def test_distance_equal_to_threshold_resolves():
    dataset = make_dataset(A=[0.0])
    assert resolve(dataset, click(1, 1.0), "rowid", "value", 1.0) == "A"


def test_distance_just_beyond_threshold_is_none():
    dataset = make_dataset(A=[0.0])
    assert resolve(dataset, click(1, 1.5), "rowid", "value", 1.0) is None
    assert resolve(dataset, click(1, 1.0), "rowid", "value", 0.999) is None


def test_no_threshold_accepts_any_distance(three_series):
    assert resolve(three_series, click(2, 50.0), "rowid", "value") == "V30"


def test_no_click_yet(three_series):
    assert resolve(three_series, None, "rowid", "value", 1.0) is None


def test_empty_dataset_is_none():
    empty = make_dataset()
    assert resolve(empty, click(1, 1), "rowid", "value") is None
    assert resolve(pd.DataFrame(), click(1, 1), "rowid", "value") is None


def test_tie_goes_to_first_row():
    # A and B are both at distance 1 from the click
    dataset = make_dataset(A=[0.0], B=[2.0])
    assert resolve(dataset, click(1, 1.0), "rowid", "value") == "A"

    reversed_order = make_dataset(B=[2.0], A=[0.0])
    assert resolve(reversed_order, click(1, 1.0), "rowid", "value") == "B"


def test_axis_scaling_changes_nearest():
    dataset = make_dataset(A=[0.0, 0.0], B=[10.0, 2.0])
    # Unscaled, B at rowid 2 is one unit away
    assert resolve(dataset, click(1, 2.0), "rowid", "value") == "B"
    # Weighting x distances tenfold favours A at the clicked rowid
    assert resolve(dataset, click(1, 2.0), "rowid", "value", x_scale=0.1) == "A"


def test_transform_is_applied_before_threshold():
    dataset = make_dataset(A=[0.0], B=[1.0])

    def to_pixels(points):
        return np.asarray(points) * 100.0

    # 0.3 data units is 30 pixels: too far for a 20 px threshold
    assert resolve(dataset, click(1, 0.3), "rowid", "value", 20.0, transform=to_pixels) is None
    assert resolve(dataset, click(1, 0.15), "rowid", "value", 20.0, transform=to_pixels) == "A"


def test_nan_rows_never_win():
    dataset = make_dataset(A=[np.nan], B=[10.0])
    assert resolve(dataset, click(1, 0.0), "rowid", "value") == "B"


@pytest.mark.parametrize("x_field,y_field", [("", "value"), (None, "value"), ("rowid", "missing")])
def test_missing_fields_fail_fast(three_series, x_field, y_field):
    with pytest.raises(FieldBindingError):
        resolve(three_series, click(1, 1), x_field, y_field)


def test_duplicate_columns_are_ambiguous():
    dataset = pd.DataFrame([[1, "A", 2.0, 3.0]], columns=["rowid", "name", "value", "value"])
    with pytest.raises(FieldBindingError, match="ambiguous"):
        validate_bindings(dataset, "rowid", "value")


def test_resolver_validates_at_construction(three_series):
    with pytest.raises(FieldBindingError):
        NearestPointResolver(three_series, FieldBinding(x_field="time"))


def test_resolver_uses_binding(three_series):
    resolver = NearestPointResolver(three_series, FieldBinding(max_distance=1.0))
    assert resolver(click(3, 5.2)) == "V30"
    assert resolver(click(3, 20.0)) is None
