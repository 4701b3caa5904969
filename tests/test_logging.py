"""Tests for the PprintLogger and setup_logging functionality.

This module verifies:
- Resources are logged in their JSON wire shape (aliases, not field names)
- pprint=False falls back to str() and %-style args
- Delegation to the underlying logger
- setup_logging level names, explicit names and handler reuse
- execute_query logs surfaces it could not build without configuring handlers
"""

import logging
from io import StringIO

from omgraph.graphql import execute_query
from omgraph.logging import PprintLogger, setup_logging
from omgschema import Document, FileElement


def _capture(name: str) -> tuple[logging.Logger, StringIO]:
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    logger.handlers.clear()
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter("%(levelname)s - %(message)s"))
    logger.addHandler(handler)
    return logger, stream


class TestPprintLogger:
    """Tests for PprintLogger formatting and delegation."""

    def test_resource_logged_as_wire_json(self) -> None:
        logger, stream = _capture("test_resource_logged")
        doc = Document(elements=[FileElement(key="photo", content_type="image/png", uri="ipfs://a")])

        PprintLogger(logger).info(doc)

        output = stream.getvalue()
        assert '"contentType": "image/png"' in output
        assert "content_type" not in output

    def test_nested_structures_formatted(self) -> None:
        logger, stream = _capture("test_nested")
        fields = {"post": {"title": "string", "photos": ["file", {"multiple": True}]}}

        PprintLogger(logger).debug(fields)

        output = stream.getvalue()
        assert "DEBUG" in output
        assert "'photos'" in output
        assert "'multiple': True" in output

    def test_pprint_false_uses_args(self) -> None:
        logger, stream = _capture("test_pprint_false")

        PprintLogger(logger).warning("could not resolve %s", "omg://x", pprint=False)

        assert "WARNING - could not resolve omg://x" in stream.getvalue()

    def test_all_levels(self) -> None:
        logger, stream = _capture("test_all_levels")
        pprint_logger = PprintLogger(logger)

        pprint_logger.debug({"level": "d"})
        pprint_logger.info({"level": "i"})
        pprint_logger.warning({"level": "w"})
        pprint_logger.error({"level": "e"})
        pprint_logger.critical({"level": "c"})

        output = stream.getvalue()
        for name in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            assert name in output

    def test_exception_logging(self) -> None:
        logger, stream = _capture("test_exception")

        try:
            raise KeyError("title")
        except KeyError:
            PprintLogger(logger).exception({"key": "title"})

        output = stream.getvalue()
        assert "'key': 'title'" in output
        assert "KeyError" in output

    def test_delegates_to_underlying_logger(self) -> None:
        logger = logging.getLogger("test_delegates")
        pprint_logger = PprintLogger(logger)

        pprint_logger.setLevel(logging.WARNING)

        assert logger.level == logging.WARNING
        assert pprint_logger.handlers == logger.handlers


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_uses_caller_name(self) -> None:
        def compile_surface() -> PprintLogger:
            return setup_logging()

        assert compile_surface().name == "compile_surface"

    def test_explicit_name_and_level_name(self) -> None:
        logger = setup_logging("debug", name="omgraph.test_level_name")

        assert logger.name == "omgraph.test_level_name"
        assert logger.level == logging.DEBUG

    def test_unknown_level_name_falls_back_to_info(self) -> None:
        logger = setup_logging("LOUD", name="omgraph.test_unknown_level")

        assert logger.level == logging.INFO

    def test_does_not_duplicate_handlers(self) -> None:
        first = setup_logging(name="omgraph.test_handlers")
        second = setup_logging(name="omgraph.test_handlers")

        assert first._logger is second._logger  # pylint: disable=protected-access
        assert len(second.handlers) == 1


async def test_execute_query_logs_build_failure(store) -> None:
    logger, stream = _capture("omgraph.graphql.schema")

    await execute_query(store, store, ["omg://missing"], "{ __typename }")

    assert "could not build surface for ['omg://missing']" in stream.getvalue()
    logger.handlers.clear()


async def test_execute_query_leaves_handlers_alone(store) -> None:
    logger = logging.getLogger("omgraph.graphql.schema")
    logger.handlers.clear()

    await execute_query(store, store, [], "{ __typename }")
    await execute_query(store, store, ["omg://missing"], "{ __typename }")

    assert logger.handlers == []
