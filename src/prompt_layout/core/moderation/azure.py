"""Azure AI Content Safety moderator.

Sends text to ``{endpoint}/contentsafety/text:analyze`` and maps the
per-category severities onto the moderation category taxonomy:

=====================  =============
moderation category    source
=====================  =============
hate, hate/threatening Hate
self-harm              SelfHarm
sexual, sexual/minors  Sexual
violence,              Violence
violence/graphic
=====================  =============

A category is flagged when ``0 < severity <= threshold`` for a configured
category; its score is ``severity / 6``.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from prompt_layout.configs.system import ModerationConfig
from prompt_layout.core.memory import Memory
from prompt_layout.infra.telemetry import (
    ATTR_FLAGGED,
    SPAN_MODERATION_ANALYZE,
    tracer,
)

from .base import Moderator
from .models import (
    FLAGGED_INPUT_ACTION,
    FLAGGED_OUTPUT_ACTION,
    HTTP_ERROR_ACTION,
    ModerationResult,
    Plan,
    PredictedDoCommand,
    PredictedSayCommand,
)

logger = logging.getLogger(__name__)

INPUT_MEMORY_KEY = "temp.input"
SEVERITY_SCALE = 6
_SUBSCRIPTION_KEY_HEADER = "Ocp-Apim-Subscription-Key"
_ANALYZE_PATH = "/contentsafety/text:analyze"

# Content-safety category → moderation categories it drives.
_CATEGORY_MAP: dict[str, tuple[str, ...]] = {
    "Hate": ("hate", "hate/threatening"),
    "SelfHarm": ("self-harm",),
    "Sexual": ("sexual", "sexual/minors"),
    "Violence": ("violence", "violence/graphic"),
}

# Preview API responses carry one ``<name>Result`` object per category.
_LEGACY_RESULT_KEYS = {
    "hateResult": "Hate",
    "selfHarmResult": "SelfHarm",
    "sexualResult": "Sexual",
    "violenceResult": "Violence",
}

_MODERATION_CATEGORIES = (
    "hate",
    "hate/threatening",
    "self-harm",
    "sexual",
    "sexual/minors",
    "violence",
    "violence/graphic",
)


class ModerationUnavailable(Exception):
    """Raised internally when the service returns no usable analysis."""


def _extract_severities(data: Any) -> dict[str, int]:
    """Return ``{category: severity}`` from either response format."""
    if not isinstance(data, dict) or not data:
        raise ModerationUnavailable("Empty content-safety response")

    severities: dict[str, int] = {}
    analysis = data.get("categoriesAnalysis") or []
    if not isinstance(analysis, list):
        raise ModerationUnavailable(f"Malformed categoriesAnalysis: {analysis!r}")
    for item in analysis:
        if not isinstance(item, dict) or "category" not in item:
            raise ModerationUnavailable(f"Malformed category analysis: {item!r}")
        severities[item["category"]] = _severity(item)
    for key, category in _LEGACY_RESULT_KEYS.items():
        result = data.get(key)
        if not result:
            continue
        if not isinstance(result, dict):
            raise ModerationUnavailable(f"Malformed {key}: {result!r}")
        severities[result.get("category", category)] = _severity(result)
    return severities


def _severity(item: dict[str, Any]) -> int:
    try:
        return int(item.get("severity") or 0)
    except (TypeError, ValueError) as e:
        raise ModerationUnavailable(f"Malformed severity: {item!r}") from e


class AzureContentSafetyModerator(Moderator):
    """Moderator backed by the Azure AI Content Safety text API.

    Transport failures and empty responses never raise: they turn into a
    plan with a single ``___HttpError___`` action so the caller can react.
    """

    def __init__(
        self,
        options: ModerationConfig,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.options = options
        self._client = client
        self._thresholds = {c.category: c.severity for c in options.categories}

    @property
    def url(self) -> str:
        return self.options.endpoint.rstrip("/") + _ANALYZE_PATH

    # ------------------------------------------------------------------
    # Moderator interface
    # ------------------------------------------------------------------

    async def review_input(self, context: Any, memory: Memory) -> Plan | None:
        if self.options.moderate not in ("input", "both"):
            return None

        text = memory.get_value(INPUT_MEMORY_KEY) or ""
        try:
            result = await self.create_moderation(text)
        except (httpx.HTTPError, ValueError, ModerationUnavailable) as e:
            logger.warning("Input moderation failed: %s", e)
            return self._error_plan()

        if result.flagged:
            logger.info("Input flagged by content safety")
            return Plan(
                commands=[
                    PredictedDoCommand(
                        action=FLAGGED_INPUT_ACTION,
                        parameters=result.model_dump(),
                    )
                ]
            )
        return None

    async def review_output(self, context: Any, memory: Memory, plan: Plan) -> Plan:
        if self.options.moderate not in ("output", "both"):
            return plan

        for command in plan.commands:
            if not isinstance(command, PredictedSayCommand):
                continue
            try:
                result = await self.create_moderation(command.response)
            except (httpx.HTTPError, ValueError, ModerationUnavailable) as e:
                logger.warning("Output moderation failed: %s", e)
                return self._error_plan()
            if result.flagged:
                logger.info("Output flagged by content safety")
                return Plan(
                    commands=[
                        PredictedDoCommand(
                            action=FLAGGED_OUTPUT_ACTION,
                            parameters=result.model_dump(),
                        )
                    ]
                )
        return plan

    # ------------------------------------------------------------------
    # Content-safety call
    # ------------------------------------------------------------------

    async def create_moderation(self, text: str) -> ModerationResult:
        """Analyze *text* and map the response to a ``ModerationResult``."""
        body = {"text": text, "categories": list(self._thresholds)}
        with tracer.start_as_current_span(SPAN_MODERATION_ANALYZE) as span:
            data = await self._post(body)
            result = self.to_moderation_result(_extract_severities(data))
            span.set_attribute(ATTR_FLAGGED, result.flagged)
        return result

    def to_moderation_result(self, severities: dict[str, int]) -> ModerationResult:
        categories = dict.fromkeys(_MODERATION_CATEGORIES, False)
        scores = dict.fromkeys(_MODERATION_CATEGORIES, 0.0)
        for source, targets in _CATEGORY_MAP.items():
            severity = severities.get(source, 0)
            threshold = self._thresholds.get(source)
            flagged = threshold is not None and 0 < severity <= threshold
            for target in targets:
                categories[target] = flagged
                scores[target] = severity / SEVERITY_SCALE if flagged else 0.0
        return ModerationResult(
            flagged=any(categories.values()),
            categories=categories,
            category_scores=scores,
        )

    async def _post(self, body: dict[str, Any]) -> Any:
        params = {"api-version": self.options.api_version}
        headers = {_SUBSCRIPTION_KEY_HEADER: self.options.api_key}
        if self._client is not None:
            response = await self._client.post(
                self.url, params=params, headers=headers, json=body
            )
            response.raise_for_status()
            return response.json() if response.content else None

        async with httpx.AsyncClient(timeout=self.options.timeout) as client:
            response = await client.post(
                self.url, params=params, headers=headers, json=body
            )
            response.raise_for_status()
            return response.json() if response.content else None

    @staticmethod
    def _error_plan() -> Plan:
        return Plan(commands=[PredictedDoCommand(action=HTTP_ERROR_ACTION)])
