"""
Tests for the request surface and run orchestration.

Focus Areas:
1. Request parsing, including the original message shape
2. Collection analysis runs and their rendered text
3. Broken-variable check runs, empty selection and document faults
"""

import asyncio
from unittest.mock import AsyncMock, Mock

import pytest

from varaudit.config import AuditConfig
from varaudit.exceptions import (
    DocumentAccessError,
    EmptySelectionError,
    RequestValidationError,
    UnknownCollectionError,
)
from varaudit.host import SnapshotDocument
from varaudit.requests import (
    AnalyzeCollectionRequest,
    AuditSession,
    CheckBrokenVariablesRequest,
    parse_request,
    render_unused,
)


class TestParseRequest:
    """Test request message validation."""

    def test_analyze_collection(self):
        """Test snake_case fields parse into an analysis request."""
        request = parse_request(
            {"type": "analyze-collection", "collection_id": "C", "include_all": True}
        )
        assert request == AnalyzeCollectionRequest(
            type="analyze-collection", collection_id="C", include_all=True
        )

    def test_host_message_shape(self):
        """The plugin UI's collectionSelected message is accepted."""
        request = parse_request(
            {"type": "collectionSelected", "collectionId": "C", "showAll": True}
        )
        assert isinstance(request, AnalyzeCollectionRequest)
        assert request.collection_id == "C"
        assert request.include_all is True

    def test_include_all_defaults_off(self):
        """Test the full listing is off unless asked for."""
        request = parse_request({"type": "analyze-collection", "collectionId": "C"})
        assert request.include_all is False

    def test_check_broken_variables(self):
        """Test the broken-variable check request parses."""
        request = parse_request({"type": "check-broken-variables"})
        assert isinstance(request, CheckBrokenVariablesRequest)

    @pytest.mark.parametrize(
        "message",
        [{}, {"type": "delete-everything"}, {"type": "analyze-collection"}],
    )
    def test_invalid_messages(self, message):
        """Test unknown types and missing fields are rejected."""
        with pytest.raises(RequestValidationError):
            parse_request(message)


class TestAnalyzeCollection:
    """Test collection analysis runs."""

    def test_scenario_result(self, scenario):
        """Test the full result and text for a collection with one unused variable."""
        document, store = scenario
        sink = Mock()
        session = AuditSession(document, store, sink=sink)

        result = asyncio.run(
            session.handle({"type": "analyze-collection", "collectionId": "C", "includeAll": True})
        )

        assert result.status == "ok"
        assert result.unused_list == ["color/bg/hovered"]
        assert result.all_sorted_list == [
            "color/bg/rest",
            "color/bg/hovered",
            "typography/font-family/base",
        ]
        assert result.message == (
            "📦 All variables (structural order):\n"
            "• color/bg/rest\n"
            "• color/bg/hovered\n"
            "• typography/font-family/base\n"
            "\n"
            "🟡 Unused variables:\n"
            "• color/bg/hovered"
        )
        sink.publish.assert_called_once_with(result)

    def test_all_used_message(self, scenario, make_node):
        """Test a fully used collection reports success text."""
        document, store = scenario
        document.page.append(make_node("extra", strokes=["B"]))
        result = asyncio.run(AuditSession(document, store).analyze_collection("C"))
        assert result.unused_list == []
        assert result.all_sorted_list is None
        assert result.message == "✅ All variables are used"

    def test_unknown_collection(self, scenario):
        """Test analyzing a collection the store does not list fails."""
        document, store = scenario
        with pytest.raises(UnknownCollectionError):
            asyncio.run(AuditSession(document, store).analyze_collection("NOPE"))

    def test_document_fault_is_run_level_failure(self, scenario):
        """Test document provider faults surface as DocumentAccessError."""
        _, store = scenario
        document = Mock()
        document.current_page_roots.side_effect = RuntimeError("document closed")
        with pytest.raises(DocumentAccessError) as exc_info:
            asyncio.run(AuditSession(document, store).analyze_collection("C"))
        assert exc_info.value.source == "page"
        assert "document closed" in str(exc_info.value)

    def test_render_unused(self):
        """Test unused names render as a bulleted list."""
        assert render_unused(["a", "b"]) == "🟡 Unused variables:\n• a\n• b"


class TestCheckBrokenVariables:
    """Test broken-variable check runs."""

    def test_empty_selection_via_handle(self, scenario):
        """Test an empty selection yields an empty-selection result."""
        document, store = scenario
        sink = Mock()
        result = asyncio.run(
            AuditSession(document, store, sink=sink).handle(
                {"type": "check-broken-variables"}
            )
        )
        assert result.status == "empty-selection"
        assert result.message == "⚠️ Nothing selected"
        assert result.broken_bindings == []
        assert result.broken_summary is None
        sink.publish.assert_called_once_with(result)

    def test_empty_selection_skips_validation(self, scenario):
        """Test nothing is resolved when nothing is selected."""
        document, _ = scenario
        store = Mock()
        with pytest.raises(EmptySelectionError):
            asyncio.run(AuditSession(document, store).check_broken_variables())
        store.resolve_variable.assert_not_called()

    def test_healthy_selection(self, scenario):
        """Test a healthy selection reports success text."""
        document, store = scenario
        document.select("frame")
        result = asyncio.run(AuditSession(document, store).check_broken_variables())
        assert result.status == "ok"
        assert result.broken_bindings == []
        assert result.message == "✅ No broken variables found"

    def test_broken_bindings_reported(self, scenario, make_node, make_variable):
        """Test broken bindings are listed and summarized per node and property."""
        document, store = scenario
        store.add_variable(make_variable("D", "color/bg/dead", collection_id="GONE"))
        document.page.append(
            make_node(
                "broken",
                name="Badge",
                fills=["D", "MISSING"],
                strokes=["A"],
                bindings={"width": "MISSING"},
            )
        )
        document = SnapshotDocument(document.page, ["broken"])

        config = AuditConfig(plural_forms=("token", "tokens", "tokens"))
        result = asyncio.run(
            AuditSession(document, store, config=config).check_broken_variables()
        )

        assert [(r.property_name, r.variable_id) for r in result.broken_bindings] == [
            ("width", "MISSING"),
            ("fills.color", "D"),
            ("fills.color", "MISSING"),
        ]
        assert result.broken_summary.counts() == {
            "Badge": {"width": 1, "fills.color": 2}
        }
        assert "fills.color: 2 broken tokens" in result.message
        assert "width: 1 broken token" in result.message

    def test_deleted_local_variable(self, scenario):
        """A variable gone from the local listing is reported as deleted."""
        document, store = scenario
        document.select("label")
        original = store.list_all_variables

        async def without_a():
            return [v for v in await original() if v.id != "A"]

        store.list_all_variables = without_a
        result = asyncio.run(AuditSession(document, store).check_broken_variables())
        assert result.broken_bindings[0].reason_text == "local variable was deleted"

    def test_listing_fault_does_not_abort_check(self, scenario):
        """Test a failing local listing still yields a result, skipping only the deleted-local check."""
        document, store = scenario
        document.select("label")
        faulty = AsyncMock()
        faulty.list_all_variables.side_effect = RuntimeError("store offline")
        faulty.resolve_variable.side_effect = store.resolve_variable
        faulty.resolve_collection.side_effect = store.resolve_collection

        result = asyncio.run(
            AuditSession(document, faulty).handle({"type": "check-broken-variables"})
        )

        assert result.status == "ok"
        assert result.broken_bindings == []
        assert result.message == "✅ No broken variables found"
        faulty.resolve_variable.assert_awaited_once_with("A")


class TestCollectionChoices:
    """Test the collection picker listing."""

    def test_lists_local_collections(self, scenario):
        """The picker gets each local collection's id and name."""
        document, store = scenario
        choices = asyncio.run(AuditSession(document, store).list_collection_choices())
        assert [choice.model_dump() for choice in choices] == [
            {"id": "C", "name": "Tokens"}
        ]
