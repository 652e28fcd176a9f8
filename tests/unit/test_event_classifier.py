"""
Unit tests for time_trace_analyzer.processors.event_classifier module.
"""
import pytest
from time_trace_analyzer.core.types import EventCategory, FrontendOperation
from time_trace_analyzer.processors.event_classifier import (
    classify,
    frontend_operation,
    is_backend_operation,
)


class TestClassify:
    """Tests for mapping event names to categories."""

    @pytest.mark.parametrize("name,category", [
        ("Frontend", EventCategory.FRONTEND),
        ("Backend", EventCategory.BACKEND),
        ("Source", EventCategory.SOURCE),
        ("InstantiateFunction", EventCategory.INSTANTIATE_FUNCTION),
        ("InstantiateClass", EventCategory.INSTANTIATE_CLASS),
        ("ParseClass", EventCategory.PARSE_CLASS),
        ("DebugType", EventCategory.DEBUG_TYPE),
        ("CodeGenFunction", EventCategory.CODE_GEN_FUNCTION),
        ("DevirtSCCRepeatedPass", EventCategory.DEVIRT_PASS),
        ("OptFunction", EventCategory.OPT_FUNCTION),
    ])
    def test_known_names(self, name, category):
        assert classify(name) is category

    @pytest.mark.parametrize("name", ["ExecuteCompiler", "Total Frontend", "source", "", "OptModule"])
    def test_unknown_names(self, name):
        assert classify(name) is EventCategory.OTHER


class TestFamilies:
    """Tests for frontend/backend operation families."""

    def test_frontend_operations(self):
        assert frontend_operation(EventCategory.PARSE_CLASS) is FrontendOperation.PARSE_CLASS
        assert frontend_operation(EventCategory.CODE_GEN_FUNCTION) is FrontendOperation.CODE_GEN_FUNCTION
        assert frontend_operation(EventCategory.SOURCE) is None
        assert frontend_operation(EventCategory.OPT_FUNCTION) is None

    def test_every_frontend_operation_is_reachable(self):
        reachable = {frontend_operation(category) for category in EventCategory} - {None}
        assert reachable == set(FrontendOperation)

    def test_backend_operations(self):
        assert is_backend_operation(EventCategory.DEVIRT_PASS)
        assert is_backend_operation(EventCategory.OPT_FUNCTION)
        assert not is_backend_operation(EventCategory.BACKEND)
        assert not is_backend_operation(EventCategory.CODE_GEN_FUNCTION)

    def test_frontend_operation_order_is_by_name(self):
        assert sorted(FrontendOperation) == [
            FrontendOperation.CODE_GEN_FUNCTION,
            FrontendOperation.DEBUG_TYPE,
            FrontendOperation.INSTANTIATE_CLASS,
            FrontendOperation.INSTANTIATE_FUNCTION,
            FrontendOperation.PARSE_CLASS,
        ]
