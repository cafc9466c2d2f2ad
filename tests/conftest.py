import matplotlib

matplotlib.use("Agg")

import pandas as pd
import pytest

from highlightsync.data_loader import to_long_format


def make_dataset(**series):
    """Long dataset from keyword series, e.g. make_dataset(V1=[0, 0], V2=[1, 1])."""
    return to_long_format(pd.DataFrame(series))


@pytest.fixture
def three_series():
    # V30 sits well above the other two
    return make_dataset(V1=[0.0, 0.0, 0.0], V2=[1.0, 1.0, 1.0], V30=[5.0, 5.0, 5.0])


@pytest.fixture
def disjoint_series():
    return make_dataset(W1=[0.0, 1.0, 2.0], W2=[2.0, 1.0, 0.0])
