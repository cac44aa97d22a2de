"""Unit tests for conversion logging scopes and error records."""
from __future__ import annotations

import json
import logging

import pytest

from markupgen.utils.errors import (
    ConversionError,
    ErrorCode,
    UnknownPositionError,
    make_error,
)
from markupgen.utils.logging import (
    conversion_scope,
    current_conversion,
    increment_counter,
    record_problem,
)


def test_conversion_scope_provides_context():
    logger = logging.getLogger("test.logger")
    with conversion_scope("unit_test", logger=logger, extra={"location": "memory"}) as ctx:
        assert current_conversion() is ctx
        increment_counter("fragments.merged")
        increment_counter("fragments.merged", 2)
        record_problem(make_error(ErrorCode.EXTENSION_INERT))
        assert ctx.counters["fragments.merged"] == 3
        assert ctx.fields()["location"] == "memory"
    assert current_conversion() is None
    assert ctx.problems[0]["code"] == "EXTENSION_INERT"


def test_helpers_are_noops_outside_a_scope():
    increment_counter("ignored")
    record_problem(make_error(ErrorCode.FRAGMENT_PARSE_FAILED))
    assert current_conversion() is None


def test_scope_logs_start_and_finish(caplog):
    caplog.set_level(logging.INFO, logger="markupgen.conversion")
    with conversion_scope("logged"):
        increment_counter("extensions.applied")
    messages = [record.getMessage() for record in caplog.records]
    assert messages[0] == "conversion.start"
    assert messages[-1] == "conversion.finish"
    assert caplog.records[-1].counters == {"extensions.applied": 1}


def test_scope_reraises_and_logs_errors(caplog):
    caplog.set_level(logging.INFO, logger="markupgen.conversion")
    with pytest.raises(ConversionError):
        with conversion_scope("failing"):
            raise ConversionError(ErrorCode.MISSING_TAGS, "no tags")
    assert any(record.getMessage() == "conversion.error" for record in caplog.records)
    assert current_conversion() is None


def test_make_error_uses_templates():
    problem = make_error(ErrorCode.FRAGMENT_PARSE_FAILED, source="dynoview-doc-end-x.adoc")
    assert problem["fatal"] is False
    assert problem["source"] == "dynoview-doc-end-x.adoc"
    assert problem["recovery"]
    json.dumps(problem)

    custom = make_error(ErrorCode.MISSING_TAGS, "custom", recovery=["retry"])
    assert custom == {
        "code": "MISSING_TAGS",
        "fatal": True,
        "message": "custom",
        "recovery": ["retry"],
    }


def test_exceptions_serialise():
    error = ConversionError(ErrorCode.MISSING_TAGS, "operation 'ping' has no tags")
    assert error.to_dict()["code"] == "MISSING_TAGS"
    position_error = UnknownPositionError("Ext", "DOC_MIDDLE")
    assert str(position_error) == "Unknown position 'DOC_MIDDLE' for extension Ext"
    assert position_error.to_dict()["fatal"] is True
