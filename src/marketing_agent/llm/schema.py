"""Pydantic schema for LLM analysis output.

Defines MarketingAnalysis - the validated structured result. The same models
drive the JSON skeleton embedded in the prompt (example_payload) and the
validation of the reply, so the requested and accepted shapes cannot drift.
"""

from __future__ import annotations

import copy
from typing import Any, Dict, List, get_args, get_origin
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SchemaModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, frozen=True, coerce_numbers_to_str=True)


def text(example: str):
    return Field(..., examples=[example])


def items(*examples: Any):
    """Required, non-empty list; `examples` become the list shown in the prompt."""
    return Field(..., min_length=1, examples=[list(examples)])


def numbered(prefix: str, count: int) -> List[str]:
    return [f"{prefix} {i}" for i in range(1, count + 1)]


class Overview(SchemaModel):
    business_type: str = text("string describing the business")
    target_audience: str = text("detailed target audience description")
    value_proposition: str = text("clear value proposition")
    competitive_advantages: List[str] = items(*numbered("advantage", 3))


class BrandStrategy(SchemaModel):
    positioning: str = text("detailed brand positioning statement")
    voice_tone: str = text("description of brand voice and tone")
    key_messages: List[str] = items(*numbered("message", 3))
    brand_personality: List[str] = items(*numbered("trait", 4))


class CalendarWeek(SchemaModel):
    week: str = text("Week 1")
    topics: List[str] = items(*numbered("topic", 3))


class ContentStrategy(SchemaModel):
    content_pillars: List[str] = items(*numbered("pillar", 4))
    content_types: List[str] = items(*numbered("type", 5))
    posting_frequency: str = text("recommended posting schedule")
    content_calendar: List[CalendarWeek] = items(
        *({"week": week, "topics": numbered("topic", 3)} for week in numbered("Week", 4))
    )


class SeoStrategy(SchemaModel):
    primary_keywords: List[str] = items(*numbered("keyword", 3))
    secondary_keywords: List[str] = items(*numbered("keyword", 5))
    content_recommendations: List[str] = items(*numbered("recommendation", 3))
    technical_seo: List[str] = Field(..., alias="technicalSEO", min_length=1, examples=[numbered("action", 3)])


class SocialPlatform(SchemaModel):
    platform: str = text("LinkedIn")
    strategy: str = text("detailed strategy")
    content_ideas: List[str] = items(*numbered("idea", 3))
    posting_schedule: str = text("schedule description")


class SocialMediaStrategy(SchemaModel):
    platforms: List[SocialPlatform] = items(
        *(
            {
                "platform": name,
                "strategy": "detailed strategy",
                "contentIdeas": numbered("idea", 3),
                "postingSchedule": "schedule description",
            }
            for name in ("LinkedIn", "Twitter/X", "Instagram")
        )
    )


class BudgetAllocation(SchemaModel):
    channel: str = text("channel name")
    percentage: str = text("XX%")
    rationale: str = text("why this allocation")


class CampaignIdea(SchemaModel):
    name: str = text("campaign name")
    objective: str = text("campaign objective")
    targeting: str = text("target audience details")
    creative: str = text("creative concept")


class PaidAdvertising(SchemaModel):
    recommended_channels: List[str] = items(*numbered("channel", 3))
    budget_allocation: List[BudgetAllocation] = Field(..., min_length=1)
    campaign_ideas: List[CampaignIdea] = Field(..., min_length=1)


class AutomationFlow(SchemaModel):
    name: str = text("flow name")
    trigger: str = text("what triggers this flow")
    emails: List[str] = items(*(f"email {i} subject" for i in range(1, 4)))


class EmailMarketing(SchemaModel):
    strategy: str = text("overall email marketing approach")
    segmentation: List[str] = items(*numbered("segment", 3))
    campaign_types: List[str] = items(*numbered("type", 3))
    automation_flows: List[AutomationFlow] = Field(..., min_length=1)


class Kpi(SchemaModel):
    metric: str = text("metric name")
    target: str = text("target value")
    measurement: str = text("how to measure")


class Metrics(SchemaModel):
    kpis: List[Kpi] = Field(..., min_length=1)


class ActionPlan(SchemaModel):
    immediate: List[str] = items(*numbered("action", 3))
    short_term: List[str] = items(*numbered("action", 3))
    long_term: List[str] = items(*numbered("action", 3))


class MarketingAnalysis(SchemaModel):
    """
    Complete marketing strategy for one page.
    Every field is required and every list is non-empty; there are no defaults.
    """
    overview: Overview
    brand_strategy: BrandStrategy
    content_strategy: ContentStrategy
    seo_strategy: SeoStrategy
    social_media_strategy: SocialMediaStrategy
    paid_advertising: PaidAdvertising
    email_marketing: EmailMarketing
    metrics: Metrics
    action_plan: ActionPlan

    def to_payload(self) -> Dict[str, Any]:
        """JSON-ready dict using the wire (camelCase) field names."""
        return self.model_dump(mode="json", by_alias=True)


def _wire_name(name: str, model: type[BaseModel]) -> str:
    field = model.model_fields[name]
    return field.alias or name


def _example_for(annotation: Any) -> Any:
    if isinstance(annotation, type) and issubclass(annotation, BaseModel):
        return example_payload(annotation)
    if get_origin(annotation) is list:
        (item,) = get_args(annotation)
        return [_example_for(item)]
    raise TypeError(f"No example available for {annotation!r}")


def example_payload(model: type[BaseModel] = MarketingAnalysis) -> Dict[str, Any]:
    """Example JSON skeleton for `model`, keyed by wire names."""
    payload: Dict[str, Any] = {}
    for name, field in model.model_fields.items():
        key = _wire_name(name, model)
        if field.examples:
            payload[key] = copy.deepcopy(field.examples[0])
        else:
            payload[key] = _example_for(field.annotation)
    return payload


REQUIRED_SECTIONS = tuple(_wire_name(name, MarketingAnalysis) for name in MarketingAnalysis.model_fields)
