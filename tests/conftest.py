import logging
import os
import sys

import pytest


def pytest_sessionstart(session):
    # Ensure project root is on sys.path so `config` and `main` resolve
    project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
    if project_root not in sys.path:
        sys.path.insert(0, project_root)


@pytest.fixture(autouse=True)
def fresh_state():
    """Drop cached configuration, rules and logging handlers after each test."""
    yield

    from config import ConfigurationManager
    from invoice_extractor.field_extraction.rules import reset_default_rules
    from invoice_extractor.pipeline import reset_default_extractor
    from invoice_extractor.utils.logger import APP_LOGGER_NAME

    ConfigurationManager.reset()
    reset_default_rules()
    reset_default_extractor()

    app_logger = logging.getLogger(APP_LOGGER_NAME)
    app_logger.handlers.clear()
    app_logger.setLevel(logging.NOTSET)
    app_logger.propagate = True


@pytest.fixture
def rules():
    from invoice_extractor.field_extraction.rules import ExtractionRules
    return ExtractionRules()


@pytest.fixture
def extractor(rules):
    from invoice_extractor.pipeline import PageExtractor
    return PageExtractor(rules)


@pytest.fixture
def sample_records():
    from invoice_extractor.field_extraction.extraction_result import ExtractedRecord
    return [
        ExtractedRecord(
            source="orders.pdf", page=1, name="John Doe", phone="01712345678",
            address="House 5, Road 2, Dhaka 1212", value="৳970"
        ),
        ExtractedRecord(source="orders.pdf", page=2, name="করিম", address="মিরপুর, ঢাকা"),
    ]
