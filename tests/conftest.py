import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pytest


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")


@pytest.fixture
def separable_apples():
    return [
        {"features": [2, 2], "label": 0},
        {"features": [3, 3], "label": 0},
        {"features": [4, 2], "label": 0},
        {"features": [6, 5], "label": 1},
        {"features": [7, 6], "label": 1},
        {"features": [8, 5], "label": 1},
        {"features": [5, 7], "label": 1},
        {"features": [3, 6], "label": 0},
    ]


@pytest.fixture
def xor_rows():
    return [
        {"features": [0, 0], "label": 0},
        {"features": [0, 1], "label": 1},
        {"features": [1, 0], "label": 1},
        {"features": [1, 1], "label": 0},
    ]
