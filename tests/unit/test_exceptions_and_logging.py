"""
Test suite for the exception hierarchy and logging helpers.

System role: Verification of error and observability utilities
"""

import logging

from docchat.core.exceptions import (
    DocChatException,
    DocumentProcessingError,
    DownloadError,
    MissingPreconditionError,
    ParsingError,
    RAGPipelineError,
    VectorStoreError,
)
from docchat.observability.correlation import (
    CorrelationIdFilter,
    clear_correlation_id,
    get_correlation_id,
    set_correlation_id,
)
from docchat.observability.log_utils import log_with_context, safe_log_value


class TestExceptions:
    """Test suite for DocChatException subclasses."""

    def test_str_should_include_details(self) -> None:
        error = VectorStoreError("upsert failed", operation="upsert", namespace="doc-1")

        assert str(error) == "upsert failed | Details: {'operation': 'upsert', 'namespace': 'doc-1'}"

    def test_str_without_details_should_be_message(self) -> None:
        assert str(DocChatException("plain")) == "plain"

    def test_pipeline_error_should_expose_stage(self) -> None:
        error = RAGPipelineError("boom", stage="retrieve", document_id="doc-1")

        assert error.stage == "retrieve"
        assert error.details == {"stage": "retrieve", "document_id": "doc-1"}

    def test_processing_errors_should_share_base(self) -> None:
        assert issubclass(DownloadError, DocumentProcessingError)
        assert issubclass(ParsingError, DocumentProcessingError)
        assert issubclass(MissingPreconditionError, DocChatException)

    def test_parsing_error_should_record_file_type(self) -> None:
        error = ParsingError("bad", document_id="doc-1", file_type="pdf")

        assert error.details == {"file_type": "pdf", "document_id": "doc-1"}


class TestCorrelation:
    """Test suite for correlation ID helpers."""

    def test_set_should_generate_id_when_missing(self) -> None:
        correlation_id = set_correlation_id()

        assert correlation_id
        assert get_correlation_id() == correlation_id
        clear_correlation_id()
        assert get_correlation_id() == ""

    def test_filter_should_stamp_records(self) -> None:
        set_correlation_id("req-123")
        record = logging.LogRecord("test", logging.INFO, __file__, 1, "msg", None, None)

        CorrelationIdFilter().filter(record)

        assert record.correlation_id == "req-123"
        clear_correlation_id()

    def test_filter_should_use_dash_outside_requests(self) -> None:
        clear_correlation_id()
        record = logging.LogRecord("test", logging.INFO, __file__, 1, "msg", None, None)

        CorrelationIdFilter().filter(record)

        assert record.correlation_id == "-"


class TestLogUtils:
    """Test suite for log_utils."""

    def test_safe_log_value_should_truncate(self) -> None:
        value = safe_log_value("x" * 500, max_length=10)

        assert value.startswith("x" * 10)
        assert "truncated, 500 total" in value

    def test_safe_log_value_should_summarise_collections(self) -> None:
        assert safe_log_value([0.0] * 768) == "list(768 items)"
        assert safe_log_value({"a": 1}) == "dict(1 keys)"

    def test_log_with_context_should_attach_safe_extra(self, caplog) -> None:
        logger = logging.getLogger("docchat.tests")

        with caplog.at_level(logging.INFO, logger="docchat.tests"):
            log_with_context(logger, logging.INFO, "embedded", vector=[1.0, 2.0])

        assert caplog.records[-1].vector == "list(2 items)"
