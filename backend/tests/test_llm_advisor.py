"""Tests for the LLM advisor."""

import json

import httpx
import pytest

from draftboard.models.draft import DRAFT_ORDER, ActionType, DraftState
from draftboard.services.draft_session import DraftSession
from draftboard.services.llm_advisor import AdvisorError, LLMAdvisor


def _completion(content):
    return {"choices": [{"message": {"content": content}}]}


@pytest.fixture
def advisor(small_catalog):
    return LLMAdvisor(api_key="test-key", catalog=small_catalog, base_url="https://llm.test/v1/")


def _mock_client(advisor, handler):
    advisor._client = httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestPromptGeneration:
    def test_ban_prompt_lists_candidates(self, advisor, small_catalog):
        state = DraftState.from_slots(blue_picks=["Leona"])
        prompt = advisor._build_recommendation_prompt(
            state, DRAFT_ORDER[13], small_catalog.available(state.unavailable_ids()), 5
        )
        assert "blue team needs ban recommendations" in prompt
        assert "Your team has picked: Leona" in prompt
        assert "Enemy team has picked: none yet" in prompt
        assert "- Zed: Zed (mid, 52.0% WR" in prompt
        assert "- Leona:" not in prompt

    def test_pick_prompt_mentions_counters(self, advisor, small_catalog):
        state = DraftState.from_slots(red_picks=["Lux"])
        prompt = advisor._build_recommendation_prompt(
            state, DRAFT_ORDER[9], small_catalog.available(state.unavailable_ids()), 3
        )
        assert "pick recommendations" in prompt
        assert "counters: Lux" in prompt
        assert "Recommend the top 3 champions to pick" in prompt

    def test_analysis_prompt(self, advisor):
        state = DraftState.from_slots(blue_bans=["Zed"], red_bans=["Lux"])
        prompt = advisor._build_analysis_prompt(state)
        assert "- Bans: Zed" in prompt
        assert "- Picks: None yet" in prompt
        assert "- Zed:" not in prompt


class TestResponseParsing:
    def test_pure_json(self, advisor):
        content = json.dumps({"recommendations": [
            {"champion_id": "Lux", "score": 80, "reasons": ["Poke"]},
            {"championId": "Ahri", "score": "high", "reasons": "Roams well"},
            {"score": 10},
        ]})
        recs = advisor._parse_recommendations(_completion(content), ActionType.PICK)
        assert [r.champion_id for r in recs] == ["Lux", "Ahri"]
        assert recs[0].score == 80.0
        assert recs[1].score == 0.0
        assert recs[1].reasons == ["Roams well"]
        assert all(r.type == ActionType.PICK for r in recs)

    def test_markdown_and_think_block(self, advisor):
        content = (
            "<think>Zed is {strong}</think>\nHere you go:\n```json\n"
            '{"recommendations": [{"champion_id": "Zed", "score": 90, "reasons": ["a } brace"]}]}\n'
            "```"
        )
        recs = advisor._parse_recommendations(_completion(content), ActionType.BAN)
        assert [r.champion_id for r in recs] == ["Zed"]
        assert recs[0].reasons == ["a } brace"]

    def test_missing_json_raises(self, advisor):
        with pytest.raises(AdvisorError):
            advisor._parse_recommendations(_completion("I cannot help"), ActionType.BAN)

    def test_missing_list_raises(self, advisor):
        with pytest.raises(AdvisorError):
            advisor._parse_recommendations(_completion('{"picks": []}'), ActionType.BAN)

    def test_malformed_completion_raises(self, advisor):
        with pytest.raises(AdvisorError):
            advisor._parse_recommendations({"choices": []}, ActionType.BAN)


class TestHttp:
    @pytest.mark.anyio
    async def test_recommend_posts_chat_completion(self, advisor, small_catalog):
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            seen["auth"] = request.headers["Authorization"]
            seen["body"] = json.loads(request.content)
            content = json.dumps({"recommendations": [{"champion_id": "Zed", "score": 88, "reasons": []}]})
            return httpx.Response(200, json=_completion(content))

        _mock_client(advisor, handler)
        state = DraftState()
        recs = await advisor.recommend(state, DRAFT_ORDER[0], small_catalog.all(), 5)
        await advisor.close()

        assert seen["url"] == "https://llm.test/v1/chat/completions"
        assert seen["auth"] == "Bearer test-key"
        assert seen["body"]["model"] == LLMAdvisor.DEFAULT_MODEL
        assert seen["body"]["response_format"] == {"type": "json_object"}
        assert [r.champion_id for r in recs] == ["Zed"]

    @pytest.mark.anyio
    async def test_http_error_raises_advisor_error(self, advisor, small_catalog):
        _mock_client(advisor, lambda request: httpx.Response(500, json={"error": "boom"}))
        with pytest.raises(AdvisorError):
            await advisor.recommend(DraftState(), DRAFT_ORDER[0], small_catalog.all())

    @pytest.mark.anyio
    async def test_session_falls_back_when_advisor_fails(self, advisor, small_catalog):
        _mock_client(advisor, lambda request: httpx.Response(503))
        session = DraftSession(small_catalog)
        result = await session.external_recommendations(advisor)
        assert result.source == "fallback"
        assert result.champion_ids == session.recommendations.champion_ids

    @pytest.mark.anyio
    async def test_analyze_draft(self, advisor):
        payload = {"strategic_advice": "Play for dragons", "top_recommendations": []}
        _mock_client(advisor, lambda request: httpx.Response(200, json=_completion(json.dumps(payload))))
        assert await advisor.analyze_draft(DraftState()) == payload
