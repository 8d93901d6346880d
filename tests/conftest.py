import pytest

from motor_ferias.services.tabelas import get_tables


@pytest.fixture
def tables():
    return get_tables(2025)
