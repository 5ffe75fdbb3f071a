import pytest


@pytest.fixture(autouse=True)
def clear_position_cache():
    from src.routecalc.data.positions_repository import load_positions

    load_positions.cache_clear()
    yield
    load_positions.cache_clear()
