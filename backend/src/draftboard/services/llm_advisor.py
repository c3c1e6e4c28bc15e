"""LLM-backed second opinion for ban/pick recommendations.

Talks to an OpenAI-compatible chat completions endpoint. The deterministic
ranker stays authoritative: callers validate whatever comes back against
the live draft and fall back to the engine when this advisor fails.
"""

from __future__ import annotations

import json
import logging
from typing import Optional

import httpx

from draftboard.models.champion import ChampionRecord
from draftboard.models.draft import ActionType, DraftState, DraftStep
from draftboard.models.recommendations import Recommendation
from draftboard.repositories.champion_repository import ChampionCatalog

logger = logging.getLogger(__name__)

PROMPT_CANDIDATE_COUNT = 20
ANALYSIS_CANDIDATE_COUNT = 15


class AdvisorError(RuntimeError):
    """The advisor could not produce a usable answer."""


class LLMAdvisor:
    """Asks an LLM for ban/pick recommendations and draft narratives."""

    DEFAULT_BASE_URL = "https://api.openai.com/v1"
    DEFAULT_MODEL = "gpt-4o-mini"

    def __init__(
        self,
        api_key: str,
        catalog: ChampionCatalog,
        base_url: str = DEFAULT_BASE_URL,
        model: str = DEFAULT_MODEL,
        timeout: float = 15.0,
    ):
        """Initialize the advisor.

        Args:
            api_key: API key for the chat completions endpoint
            catalog: Champion catalog used to name picks in prompts
            base_url: Base URL of an OpenAI-compatible API
            model: Model id to request
            timeout: Request timeout in seconds
        """
        self.api_key = api_key
        self.catalog = catalog
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def close(self):
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def recommend(
        self,
        state: DraftState,
        turn: DraftStep,
        candidates: list[ChampionRecord],
        limit: int = 5,
    ) -> list[Recommendation]:
        """Ask for ``limit`` recommendations for ``turn``.

        Raises:
            AdvisorError: On transport errors, non-2xx responses or an
                unparseable body.
        """
        prompt = self._build_recommendation_prompt(state, turn, candidates, limit)
        try:
            response = await self._call_llm(prompt, max_tokens=1024)
        except httpx.HTTPError as e:
            logger.error(f"LLM recommendation request failed: {e}")
            raise AdvisorError(f"LLM request failed: {e}") from e
        return self._parse_recommendations(response, turn.type)

    async def analyze_draft(self, state: DraftState) -> dict:
        """Free-form draft analysis (recommendations, comps, advice) as a dict."""
        prompt = self._build_analysis_prompt(state)
        try:
            response = await self._call_llm(prompt, max_tokens=2048)
            content = response["choices"][0]["message"]["content"]
            return self._extract_json_from_response(content)
        except httpx.HTTPError as e:
            logger.error(f"LLM draft analysis request failed: {e}")
            raise AdvisorError(f"LLM request failed: {e}") from e
        except (KeyError, IndexError, TypeError, ValueError) as e:
            logger.error(f"Failed to parse LLM draft analysis: {e}")
            raise AdvisorError(f"Malformed LLM response: {e}") from e

    def _pick_names(self, picks: list[Optional[str]]) -> str:
        names = [c.name for c in self.catalog.resolve(picks)]
        return ", ".join(names) or "none yet"

    def _build_recommendation_prompt(
        self,
        state: DraftState,
        turn: DraftStep,
        candidates: list[ChampionRecord],
        limit: int,
    ) -> str:
        team = turn.team.value
        allies = self._pick_names(state.picks_for(turn.team))
        enemies = self._pick_names(state.picks_for(turn.team.opponent))
        top = sorted(candidates, key=lambda c: c.win_rate, reverse=True)[:PROMPT_CANDIDATE_COUNT]

        if turn.type == ActionType.BAN:
            lines = "\n".join(
                f"- {c.id}: {c.name} ({c.role.value}, {c.win_rate}% WR, "
                f"{c.pick_rate}% pick rate, tier {c.sort_tier.value})"
                for c in top
            )
            focus = (
                "1. High win rate + pick rate champions that could hurt your team\n"
                "2. Champions that counter your team's current picks\n"
                "3. Meta-defining champions"
            )
            task = "ban"
        else:
            lines = "\n".join(
                f"- {c.id}: {c.name} ({c.role.value}, {c.win_rate}% WR, "
                f"counters: {','.join(c.counters[:3])}, synergies: {','.join(c.synergies[:3])})"
                for c in top
            )
            focus = (
                "1. Champions that counter enemy picks\n"
                "2. Champions that synergize with your team\n"
                "3. Fill missing roles in your composition\n"
                "4. Strong meta picks"
            )
            task = "pick"

        return f"""You are a League of Legends draft expert. The {team} team needs {task} recommendations.

Enemy team has picked: {enemies}
Your team has picked: {allies}

Available champions to consider (id: name):
{lines}

Recommend the top {limit} champions to {task} with reasons. Focus on:
{focus}

Respond in JSON format, using the ids listed above:
{{
  "recommendations": [
    {{"champion_id": "ChampionId", "score": 85, "reasons": ["reason1", "reason2"]}}
  ]
}}"""

    def _build_analysis_prompt(self, state: DraftState) -> str:
        def names(slots: list[Optional[str]]) -> str:
            return ", ".join(c.name for c in self.catalog.resolve(slots)) or "None yet"

        available = sorted(
            self.catalog.available(state.unavailable_ids()),
            key=lambda c: c.win_rate,
            reverse=True,
        )[:ANALYSIS_CANDIDATE_COUNT]
        available_lines = "\n".join(
            f"- {c.id}: {c.name} ({c.role.value}, {c.win_rate}% WR, "
            f"tags: {', '.join(sorted(t.value for t in c.tags))})"
            for c in available
        )

        return f"""You are an expert League of Legends analyst. Analyze this draft state and provide detailed insights.

CURRENT DRAFT STATE:
- Phase: {state.phase.value}
- Active team: {state.active_team.value} side

BLUE SIDE:
- Picks: {names(state.blue_picks)}
- Bans: {names(state.blue_bans)}

RED SIDE:
- Picks: {names(state.red_picks)}
- Bans: {names(state.red_bans)}

AVAILABLE HIGH-PRIORITY CHAMPIONS:
{available_lines}

Provide a comprehensive analysis in the following JSON format:
{{
  "top_recommendations": [
    {{"champion_id": "ChampionId", "score": 85, "reasoning": "Why this pick/ban is strong"}}
  ],
  "composition_analysis": {{
    "blue_team": {{"damage_type": "...", "engage_potential": "...", "scaling": "...", "synergies": []}},
    "red_team": {{"damage_type": "...", "engage_potential": "...", "scaling": "...", "synergies": []}}
  }},
  "win_probability": {{"blue_win_chance": 52, "red_win_chance": 48, "key_factors": []}},
  "draft_weaknesses": {{"blue_team": [], "red_team": []}},
  "strategic_advice": "2-3 sentences of overall strategic advice for the active team"
}}

Provide exactly 3 recommendations. Be specific and analytical."""

    async def _call_llm(self, prompt: str, max_tokens: int) -> dict:
        """Call the chat completions API."""
        client = await self._get_client()

        response = await client.post(
            f"{self.base_url}/chat/completions",
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
            json={
                "model": self.model,
                "messages": [
                    {
                        "role": "system",
                        "content": "You are a League of Legends esports draft analyst. Respond only with valid JSON.",
                    },
                    {"role": "user", "content": prompt},
                ],
                "response_format": {"type": "json_object"},
                "temperature": 0.3,
                "max_tokens": max_tokens,
            },
        )

        response.raise_for_status()
        return response.json()

    def _extract_json_from_response(self, content: str) -> dict:
        """Extract a JSON object from LLM output.

        Handles pure JSON, ```json fenced blocks, <think>...</think>
        reasoning prefixes and leading/trailing prose.
        """
        content = content.strip()

        if "<think>" in content:
            think_end = content.rfind("</think>")
            if think_end != -1:
                content = content[think_end + len("</think>"):].strip()

        if "```" in content:
            for part in content.split("```"):
                part = part.strip()
                if part.startswith("json"):
                    part = part[4:].strip()
                if part.startswith("{"):
                    content = part
                    break

        start = content.find("{")
        if start == -1:
            raise ValueError("No JSON object found in response")
        content = content[start:]

        # Match the closing brace, skipping braces inside strings
        depth = 0
        in_string = False
        escape_next = False
        for i, char in enumerate(content):
            if escape_next:
                escape_next = False
                continue
            if char == "\\":
                escape_next = True
                continue
            if char == '"':
                in_string = not in_string
                continue
            if in_string:
                continue
            if char == "{":
                depth += 1
            elif char == "}":
                depth -= 1
                if depth == 0:
                    return json.loads(content[:i + 1])

        raise ValueError("No matching closing brace found")

    def _parse_recommendations(self, response: dict, action: ActionType) -> list[Recommendation]:
        """Turn a chat completion into Recommendation objects.

        Entries without a champion id are skipped; legality against the
        draft is checked by the caller.
        """
        try:
            content = response["choices"][0]["message"]["content"]
            data = self._extract_json_from_response(content)
        except (KeyError, IndexError, TypeError, ValueError) as e:
            logger.error(f"Failed to parse LLM response: {e}")
            raise AdvisorError(f"Malformed LLM response: {str(e)[:100]}") from e

        items = data.get("recommendations")
        if not isinstance(items, list):
            raise AdvisorError("Missing 'recommendations' list in LLM response")

        recommendations = []
        for item in items:
            if not isinstance(item, dict):
                continue
            champion_id = item.get("champion_id") or item.get("championId")
            if not champion_id:
                continue
            try:
                score = float(item.get("score", 0))
            except (TypeError, ValueError):
                score = 0.0
            reasons = item.get("reasons") or []
            if not isinstance(reasons, list):
                reasons = [str(reasons)]
            recommendations.append(
                Recommendation(
                    champion_id=str(champion_id),
                    score=score,
                    type=action,
                    reasons=[str(r) for r in reasons],
                )
            )

        logger.debug(f"Parsed {len(recommendations)} LLM recommendations")
        return recommendations
