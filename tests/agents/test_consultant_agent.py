"""
Tests for the Kira consultant agent runner.

The model stub plays Gemini: tool-calling scenarios call ``call_tool``
exactly as GeminiModelClient's function-calling loop would.
"""
import pytest

from kira.agents.consultant import get_document_context, run_consultant_agent
from kira.agents.consultant.prompts import (
    DOCUMENT_NOT_FOUND_WARNING,
    GUEST_PROFILE,
    NO_DOCUMENT_CONTEXT,
    build_consultant_prompt,
    format_user_profile,
)
from kira.agents.consultant.types import UserProfile
from kira.errors import GenerationFailed, IncompleteProfile, NotFound


class TestPrompts:
    def test_guest_profile(self):
        assert format_user_profile(None) == GUEST_PROFILE

    def test_profile_summary(self):
        summary = format_user_profile(UserProfile(
            industry="Manufacturing", annual_revenue=5000000, total_emissions=1440
        ))

        assert summary == "Industry: Manufacturing, Annual Revenue: RM5,000,000, Total Emissions: 1440.0t."

    def test_prompt_without_receipt(self):
        prompt = build_consultant_prompt("user123", GUEST_PROFILE, None, "Hello, who are you?")

        assert "User ID: user123" in prompt
        assert NO_DOCUMENT_CONTEXT in prompt
        assert '"Hello, who are you?"' in prompt
        assert "RM30 per tonne" in prompt


class TestGetDocumentContext:
    def test_no_document_selected(self, make_context, demo_store):
        assert get_document_context(make_context(store=demo_store), "user123", None) is None

    def test_document_found(self, make_context, demo_store):
        block = get_document_context(make_context(store=demo_store), "user123", "receipt_abc")

        assert "=== SELECTED RECEIPT/INVOICE CONTEXT ===" in block
        assert "Receipt ID: receipt_abc" in block
        assert "Vendor: Tenaga Nasional Berhad" in block
        assert "Electricity usage" in block

    def test_document_missing(self, make_context, demo_store):
        result = get_document_context(make_context(store=demo_store), "user123", "receipt_zzz")

        assert result == DOCUMENT_NOT_FOUND_WARNING

    def test_document_owned_by_someone_else(self, make_context, demo_store):
        result = get_document_context(make_context(store=demo_store), "intruder", "receipt_abc")

        assert result == DOCUMENT_NOT_FOUND_WARNING

    def test_document_without_owner(self, make_context, demo_store):
        demo_store.set("receipts", "receipt_orphan", {
            "vendor": "Unknown Vendor",
            "line_items": [{"name": "Diesel", "quantity": 100, "unit": "litres"}],
        })

        result = get_document_context(make_context(store=demo_store), "user123", "receipt_orphan")

        assert result == DOCUMENT_NOT_FOUND_WARNING


class TestRunConsultantAgent:
    def test_plain_answer(self, make_context, make_model, demo_store):
        model = make_model(lambda prompt, **kwargs: "Hi, I'm Kira.")
        context = make_context(store=demo_store, model=model)

        reply = run_consultant_agent(context, "user123", "Hello, who are you?")

        assert reply == "Hi, I'm Kira."
        call = model.calls[0]
        assert "Industry: Manufacturing" in call["prompt"]
        assert call["temperature"] == 0.3
        assert {t["name"] for t in call["tools"]} == {
            "searchCatalog",
            "simulateTaxImpact",
            "simulateInvestment",
            "getIndustryBenchmark",
        }

    def test_guest_user(self, make_context, make_model, store):
        model = make_model(lambda prompt, **kwargs: "Welcome!")
        context = make_context(store=store, model=model)

        run_consultant_agent(context, "someone-new", "Hello")

        assert GUEST_PROFILE in model.calls[0]["prompt"]

    def test_receipt_context_in_prompt(self, make_context, make_model, demo_store):
        model = make_model(lambda prompt, **kwargs: "Switch to solar.")
        context = make_context(store=demo_store, model=model)

        run_consultant_agent(
            context, "user123", "How can I reduce the carbon from this bill?", "receipt_abc"
        )

        assert "Receipt ID: receipt_abc" in model.calls[0]["prompt"]

    def test_missing_receipt_degrades_to_warning(self, make_context, make_model, demo_store):
        model = make_model(lambda prompt, **kwargs: "I couldn't find that receipt.")
        context = make_context(store=demo_store, model=model)

        reply = run_consultant_agent(context, "user123", "What about this one?", "receipt_zzz")

        assert reply == "I couldn't find that receipt."
        assert DOCUMENT_NOT_FOUND_WARNING in model.calls[0]["prompt"]

    def test_tax_tool_round_trip(self, make_context, make_model, demo_store):
        tool_results = []

        def handler(prompt, call_tool=None, **kwargs):
            result = call_tool("simulateTaxImpact", {"proposed_tax_rate": 35})
            tool_results.append(result)
            return f"You would pay RM{result['net_liability']:,.2f}."

        context = make_context(store=demo_store, model=make_model(handler))

        reply = run_consultant_agent(
            context, "user123", "If the carbon tax is RM 35 per tonne, how much will I pay?"
        )

        assert tool_results == [{"gross_liability": 50400.0, "net_liability": 400.0, "savings": 50000.0}]
        assert reply == "You would pay RM400.00."

    def test_user_id_is_injected_into_tool_arguments(self, make_context, make_model, demo_store):
        def handler(prompt, call_tool=None, **kwargs):
            result = call_tool("getIndustryBenchmark", {"user_id": "someone_else"})
            return result["performance"]

        context = make_context(store=demo_store, model=make_model(handler))

        reply = run_consultant_agent(context, "user123", "How do I compare to my industry?")

        assert reply == "18% Better (Lower Carbon) than industry average."

    def test_tool_without_user_id_is_untouched(self, make_context, make_model, demo_store):
        def handler(prompt, call_tool=None, **kwargs):
            result = call_tool("searchCatalog", {"query": "solar"})
            return result["results"][0]["supplier"]

        context = make_context(store=demo_store, model=make_model(handler))

        assert run_consultant_agent(context, "user123", "I need to buy a solar panel.") == "SolarX Sdn Bhd"

    def test_tool_failure_aborts_request(self, make_context, make_model, demo_store):
        def handler(prompt, call_tool=None, **kwargs):
            call_tool("simulateInvestment", {"asset_id": "fusion_reactor"})
            return "unreachable"

        context = make_context(store=demo_store, model=make_model(handler))

        with pytest.raises(NotFound):
            run_consultant_agent(context, "user123", "Is a fusion reactor worth it?")

    def test_guest_benchmark_is_incomplete_profile(self, make_context, make_model, store):
        def handler(prompt, call_tool=None, **kwargs):
            return call_tool("getIndustryBenchmark", {})

        context = make_context(store=store, model=make_model(handler))

        with pytest.raises(IncompleteProfile):
            run_consultant_agent(context, "guest", "How do I compare?")

    def test_unknown_tool(self, make_context, make_model, demo_store):
        def handler(prompt, call_tool=None, **kwargs):
            return call_tool("transferFunds", {})

        context = make_context(store=demo_store, model=make_model(handler))

        with pytest.raises(GenerationFailed):
            run_consultant_agent(context, "user123", "Send RM100 to Bob")
