"""Tests for observability/logger.py"""
import io
import json
import logging
import sys


class TestStructuredFormatter:
    def _get_record(self, msg, level=logging.INFO, exc_info=None, extra_fields=None):
        record = logging.LogRecord(
            name="notion_importer.test",
            level=level,
            pathname="",
            lineno=0,
            msg=msg,
            args=(),
            exc_info=exc_info,
        )
        if extra_fields is not None:
            record.extra_fields = extra_fields
        return record

    def test_basic_format(self):
        from notion_importer.observability.logger import StructuredFormatter

        result = json.loads(StructuredFormatter().format(self._get_record("hello world")))
        assert result["message"] == "hello world"
        assert result["level"] == "INFO"
        assert result["logger"] == "notion_importer.test"
        assert "ts" in result

    def test_extra_fields_merged(self):
        from notion_importer.observability.logger import StructuredFormatter

        record = self._get_record("msg", extra_fields={"page_id": "abc", "blocks": 5})
        result = json.loads(StructuredFormatter().format(record))
        assert result["page_id"] == "abc"
        assert result["blocks"] == 5

    def test_non_json_values_are_stringified(self):
        from notion_importer.errors import ErrorCode
        from notion_importer.observability.logger import StructuredFormatter

        record = self._get_record("msg", extra_fields={"code": ErrorCode.AUTH_ERROR, "obj": object()})
        result = json.loads(StructuredFormatter().format(record))
        assert result["code"] == "AUTH_ERROR"
        assert result["obj"].startswith("<object object")

    def test_exception_info_included(self):
        from notion_importer.observability.logger import StructuredFormatter

        try:
            raise ValueError("test error")
        except ValueError:
            exc_info = sys.exc_info()
        result = json.loads(StructuredFormatter().format(self._get_record("err", exc_info=exc_info)))
        assert "ValueError" in result["exception"]

    def test_single_line(self):
        from notion_importer.observability.logger import StructuredFormatter

        output = StructuredFormatter().format(self._get_record("line one\nline two"))
        assert "\n" not in output


class TestGetLogger:
    def test_returns_named_logger(self):
        from notion_importer.observability.logger import get_logger

        logger = get_logger("notion_importer.uploader")
        assert isinstance(logger, logging.Logger)
        assert logger.name == "notion_importer.uploader"
        assert logger.handlers == []

    def test_default_is_root_package_logger(self):
        from notion_importer.observability.logger import ROOT_LOGGER, get_logger

        assert get_logger().name == ROOT_LOGGER


class TestConfigureLogging:
    def test_child_records_reach_configured_stream(self):
        from notion_importer.observability.logger import configure_logging, get_logger

        stream = io.StringIO()
        configure_logging("INFO", stream=stream)
        get_logger("notion_importer.uploader").info(
            "Uploading batch", extra={"extra_fields": {"batch": 1}}
        )
        entry = json.loads(stream.getvalue())
        assert entry["message"] == "Uploading batch"
        assert entry["batch"] == 1

    def test_level_filters(self):
        from notion_importer.observability.logger import configure_logging, get_logger

        stream = io.StringIO()
        configure_logging(logging.WARNING, stream=stream)
        get_logger("notion_importer.converter").debug("hidden")
        assert stream.getvalue() == ""

    def test_idempotent_no_duplicate_handlers(self):
        from notion_importer.observability.logger import configure_logging

        logger = configure_logging(stream=io.StringIO())
        count = len(logger.handlers)
        configure_logging("DEBUG", stream=io.StringIO())
        assert len(logger.handlers) == count
        assert logger.level == logging.DEBUG

    def test_does_not_propagate(self):
        from notion_importer.observability.logger import configure_logging

        assert configure_logging(stream=io.StringIO()).propagate is False
