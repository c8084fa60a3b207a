#
# Pytest Fixtures
#

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from sizeunits.units import size_conf


# Fixtures -------------------------------------------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def restore_size_conf():
    """Restore the shared size configuration after every test."""
    wide, default_precision, max_precision = size_conf.wide, size_conf.default_precision, size_conf.max_precision
    yield size_conf
    size_conf.wide = wide
    size_conf.default_precision = default_precision
    size_conf.max_precision = max_precision


@pytest.fixture
def narrow(restore_size_conf):
    """Switch to narrow mode: 64-bit bounds, no Zetta/Yotta units."""
    restore_size_conf.wide = False
    return restore_size_conf
