# pytest plugin for projects that test memoized code.
# enable it from a conftest.py:
#   pytest_plugins = ["pytest_memoizer.plugin"]
# pytest itself is not a core dependency: install the "pytest" extra.

import pytest

from memoizer_config import MemoizerConfig
from .call_counter import CallCounter


def pytest_addoption(parser):
    group = parser.getgroup("memoizer arguments")
    group.addoption('--memoizer-conf-path', '--memoizer-conf-path',
                    action="store",
                    dest="memoizer_conf_path",
                    metavar="",
                    default=None,
                    help="path of memoizer configuration file used by the memoizer_config fixture")


@pytest.fixture
def memoizer_config(pytestconfig) -> MemoizerConfig:
    path = pytestconfig.getoption("memoizer_conf_path", default=None)
    if path is None:
        return MemoizerConfig.auto_configure()
    conf = MemoizerConfig.from_yaml(path)
    if conf.error_counter.error_count > 0:
        pytest.fail("invalid memoizer configuration file %s" % path)
    return conf


@pytest.fixture
def call_counter() -> CallCounter:
    return CallCounter()
