from datetime import datetime, timezone as dt_timezone

import pytest

from core.utils.helpers import as_aware, camelize_keys, is_number, percentage, round_half_up, safe_mean, to_camel


@pytest.mark.parametrize('value, expected', [(0.5, 1), (1.5, 2), (2.5, 3), (2.4, 2), (4.49, 4)])
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


def test_percentage():
    assert percentage(1, 3) == 33
    assert percentage(2, 3) == 67
    assert percentage(1, 2) == 50
    assert percentage(5, 0) == 0


def test_safe_mean():
    assert safe_mean(10, 4) == 2.5
    assert safe_mean(0, 0) == 0


def test_is_number_excludes_bool_and_strings():
    assert is_number(3)
    assert is_number(4.5)
    assert not is_number(True)
    assert not is_number('5')
    assert not is_number(None)


def test_camelize_keys_nested():
    data = {'risk_analysis': [{'risk_level': 'low'}], 'total_responses': 1, 'by_key': {'sub_key': (1, 2)}}
    assert camelize_keys(data) == {
        'riskAnalysis': [{'riskLevel': 'low'}],
        'totalResponses': 1,
        'byKey': {'subKey': [1, 2]},
    }
    assert to_camel('heatmap') == 'heatmap'


@pytest.mark.parametrize('value', [float('nan'), float('inf'), float('-inf')])
def test_is_number_rejects_non_finite(value):
    assert not is_number(value)


def test_as_aware_keeps_aware_and_localizes_naive(settings):
    settings.TIME_ZONE = 'UTC'
    naive = datetime(2026, 10, 19, 12, 0)
    aware = datetime(2026, 10, 19, 12, 0, tzinfo=dt_timezone.utc)

    assert as_aware(None) is None
    assert as_aware(aware) is aware
    assert as_aware(naive) == aware
