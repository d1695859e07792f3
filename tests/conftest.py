import pytest

from brodef.browser.catalog import load_catalog


@pytest.fixture
def catalog(tmp_path):
    """Packaged catalog only, never the user's ~/.brodef override."""
    return load_catalog(override_path=tmp_path / "no-override.json")
