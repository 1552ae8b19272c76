import pytest
import importlib

def pytest_addoption(parser):
    parser.addoption(
        "--mp_module",
        action="store",
        default="mp_sparse,mp_numba",
        help="Comma separated decoder modules to test (e.g. mp_sparse or mp_numba)"
    )

def pytest_generate_tests(metafunc):
    if "mp_module_name" in metafunc.fixturenames:
        names = metafunc.config.getoption("--mp_module").split(",")
        metafunc.parametrize("mp_module_name", names, scope="module")

@pytest.fixture(scope="module")
def mp_module(mp_module_name):
    return importlib.import_module(mp_module_name)
