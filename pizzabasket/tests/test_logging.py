import pytest
from pizzabasket.config import set_config_for_test
from pizzabasket.logging import configure_logging, get_logger

@pytest.fixture(autouse=True)
def restore_level():
    yield
    configure_logging("WARNING")

def test_sink_installed_once():
    """Test building loggers does not re-install the sink."""
    sink_id = configure_logging("WARNING")
    get_logger("pizzabasket.one")
    get_logger("pizzabasket.two")
    assert configure_logging() == sink_id

def test_level_change_replaces_sink():
    """Test a new configured level swaps the sink."""
    sink_id = configure_logging("WARNING")
    set_config_for_test(log_level="debug")
    get_logger("pizzabasket.debug")
    assert configure_logging("DEBUG") != sink_id

def test_messages_below_level_are_dropped(capsys):
    configure_logging("WARNING")
    logger = get_logger("pizzabasket.tests")
    logger.info("quiet message")
    logger.warning("loud message")
    out = capsys.readouterr().out
    assert "loud message" in out
    assert "quiet message" not in out
