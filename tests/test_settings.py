import pytest

from pagewise import PagerSettings
from pagewise.settings import DEFAULT_SETTINGS


@pytest.mark.parametrize(('settings', 'limit', 'expected_limit'), [
    # Defaults
    (DEFAULT_SETTINGS, None, 1000),
    (DEFAULT_SETTINGS, 10, 10),
    (DEFAULT_SETTINGS, 5000, 5000),
    # Default limit: only when no limit given
    (PagerSettings(default_limit=50), None, 50),
    (PagerSettings(default_limit=50), 0, 50),
    (PagerSettings(default_limit=50), 10, 10),
    # Max limit
    (PagerSettings(max_limit=100), None, 100),
    (PagerSettings(max_limit=100), 10, 10),
    (PagerSettings(max_limit=100), 500, 100),
    (PagerSettings(default_limit=500, max_limit=100), None, 100),
    # No default
    (PagerSettings(default_limit=None), None, None),
])
def test_get_final_limit(settings: PagerSettings, limit, expected_limit):
    assert settings.get_final_limit(limit) == expected_limit
