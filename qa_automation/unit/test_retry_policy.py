import pytest

from qa_automation.api_testing.framework.retry_policy import RetryPolicy, parse_retry_after


class DummyConfig:
    def __init__(self, data):
        self.data = data

    def get(self, key, default=None):
        return self.data.get(key, default)


def test_backoff_grows_and_is_capped():
    policy = RetryPolicy(initial_interval=1.0, multiplier=2.0, max_interval=5.0)

    waits = [policy.backoff(attempt) for attempt in range(5)]

    assert waits == [1.0, 2.0, 4.0, 5.0, 5.0]


def test_retry_after_larger_than_backoff_wins():
    policy = RetryPolicy(initial_interval=1.0, max_interval=60.0)

    assert policy.interval_for(0, "10") == 10.0
    assert policy.interval_for(0, "0.5") == 1.0


def test_retry_after_is_capped_at_max_interval():
    policy = RetryPolicy(initial_interval=1.0, max_interval=30.0)

    assert policy.interval_for(0, "120") == 30.0


def test_jitter_stays_within_bounds():
    policy = RetryPolicy(initial_interval=4.0, jitter=True)

    for _ in range(20):
        assert 3.0 <= policy.backoff(0) <= 5.0


@pytest.mark.parametrize("value, expected", [
    ("3", 3.0),
    ("1.5", 1.5),
    ("", None),
    (None, None),
    ("-1", None),
    ("Wed, 21 Oct 2015 07:28:00 GMT", None),
])
def test_parse_retry_after(value, expected):
    assert parse_retry_after(value) == expected


def test_from_config_reads_retry_keys():
    policy = RetryPolicy.from_config(DummyConfig({
        "api.retry.max_attempts": "3",
        "api.retry.initial_interval": "0.5",
    }))

    assert policy.max_attempts == 3
    assert policy.initial_interval == 0.5
    assert policy.multiplier == 2.0
    assert policy.max_interval == 60.0


@pytest.mark.parametrize("kwargs", [
    {"max_attempts": 0},
    {"initial_interval": -1},
    {"multiplier": 0.5},
])
def test_invalid_policy_is_rejected(kwargs):
    with pytest.raises(ValueError):
        RetryPolicy(**kwargs)
