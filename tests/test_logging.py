import logging

from listing_insights.models.finance import AffordabilityRating
from listing_insights.utils.logging import ROOT_LOGGER, format_event, get_logger, log_event


def test_format_event_renders_key_values():
    line = format_event(
        "listing_analyzed",
        id="L-1001",
        price=400_000.0,
        rating=AffordabilityRating.GOOD,
        walk=None,
        address="112 Savannah Rd",
    )
    assert line == "listing_analyzed id=L-1001 price=400000.00 rating=good walk=- address='112 Savannah Rd'"


def test_child_loggers_share_the_package_root():
    logger = get_logger("services.costs")
    assert logger.name == f"{ROOT_LOGGER}.services.costs"
    assert get_logger() is logging.getLogger(ROOT_LOGGER)
    assert logging.getLogger(ROOT_LOGGER).handlers


def test_log_event_respects_level(caplog):
    logger = logging.getLogger("tests.events")
    with caplog.at_level(logging.INFO, logger="tests.events"):
        log_event(logger, "skipped", level=logging.DEBUG, x=1)
        log_event(logger, "invalid_input", field="price", reason="must be > 0")
    assert [r.getMessage() for r in caplog.records] == ["invalid_input field=price reason='must be > 0'"]
