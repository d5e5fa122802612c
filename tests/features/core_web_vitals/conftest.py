import copy

import pytest


def _metric(good, needs_improvement, poor, p75):
    return {
        "histogram": [
            {"start": 0, "density": good},
            {"start": 1, "density": needs_improvement},
            {"start": 2, "density": poor},
        ],
        "percentiles": {"p75": p75},
    }


PHONE_RECORD = {
    "key": {"origin": "https://example.com", "formFactor": "PHONE"},
    "metrics": {
        "largest_contentful_paint": _metric(0.8, 0.15, 0.05, 2100),
        "cumulative_layout_shift": _metric(0.9, 0.05, 0.05, "0.05"),
        "interaction_to_next_paint": _metric(0.7, 0.2, 0.1, 250),
        "experimental_time_to_first_byte": _metric(0.6, 0.3, 0.1, 900),
    },
}


@pytest.fixture
def phone_record():
    return copy.deepcopy(PHONE_RECORD)
