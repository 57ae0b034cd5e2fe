"""Plain-text report for a MarketingAnalysis.

Deterministic renderer used for downloads and the CLI. Reads the analysis,
never changes it.
"""

from __future__ import annotations

from typing import Iterable, List

from marketing_agent.llm.schema import MarketingAnalysis

REPORT_TITLE = "COMPREHENSIVE MARKETING STRATEGY REPORT"


def _heading(title: str, underline: str = "-") -> str:
    return f"{title}\n{underline * len(title)}"


def _bullet_list(lines: Iterable[str], indent: str = "") -> str:
    return "\n".join(f"{indent}- {s}" for s in lines)


def _labeled_list(label: str, lines: Iterable[str]) -> str:
    return f"{label}:\n{_bullet_list(lines)}"


def _overview(a: MarketingAnalysis) -> str:
    o = a.overview
    return "\n".join([
        _heading("BUSINESS OVERVIEW"),
        f"Business Type: {o.business_type}",
        f"Target Audience: {o.target_audience}",
        f"Value Proposition: {o.value_proposition}",
        "",
        _labeled_list("Competitive Advantages", o.competitive_advantages),
    ])


def _brand(a: MarketingAnalysis) -> str:
    b = a.brand_strategy
    return "\n".join([
        _heading("BRAND STRATEGY"),
        f"Positioning: {b.positioning}",
        f"Voice & Tone: {b.voice_tone}",
        "",
        _labeled_list("Key Messages", b.key_messages),
        "",
        _labeled_list("Brand Personality", b.brand_personality),
    ])


def _content(a: MarketingAnalysis) -> str:
    c = a.content_strategy
    weeks = [f"{w.week}:\n{_bullet_list(w.topics, indent='  ')}" for w in c.content_calendar]
    return "\n".join([
        _heading("CONTENT STRATEGY"),
        _labeled_list("Content Pillars", c.content_pillars),
        "",
        _labeled_list("Content Types", c.content_types),
        "",
        f"Posting Frequency: {c.posting_frequency}",
        "",
        "Content Calendar:",
        "\n\n".join(weeks),
    ])


def _seo(a: MarketingAnalysis) -> str:
    s = a.seo_strategy
    return "\n".join([
        _heading("SEO STRATEGY"),
        _labeled_list("Primary Keywords", s.primary_keywords),
        "",
        _labeled_list("Secondary Keywords", s.secondary_keywords),
        "",
        _labeled_list("Content Recommendations", s.content_recommendations),
        "",
        _labeled_list("Technical SEO", s.technical_seo),
    ])


def _social(a: MarketingAnalysis) -> str:
    platforms = [
        "\n".join([
            f"{p.platform}:",
            f"Strategy: {p.strategy}",
            f"Posting Schedule: {p.posting_schedule}",
            "",
            _labeled_list("Content Ideas", p.content_ideas),
        ])
        for p in a.social_media_strategy.platforms
    ]
    return _heading("SOCIAL MEDIA STRATEGY") + "\n" + "\n\n".join(platforms)


def _paid(a: MarketingAnalysis) -> str:
    p = a.paid_advertising
    budget = [f"- {b.channel}: {b.percentage}\n  {b.rationale}" for b in p.budget_allocation]
    campaigns = [
        f"Campaign: {c.name}\nObjective: {c.objective}\nTargeting: {c.targeting}\nCreative: {c.creative}"
        for c in p.campaign_ideas
    ]
    return "\n".join([
        _heading("PAID ADVERTISING"),
        _labeled_list("Recommended Channels", p.recommended_channels),
        "",
        "Budget Allocation:",
        "\n".join(budget),
        "",
        "Campaign Ideas:",
        "\n\n".join(campaigns),
    ])


def _email(a: MarketingAnalysis) -> str:
    e = a.email_marketing
    flows = [f"{f.name}:\nTrigger: {f.trigger}\nEmails: {' → '.join(f.emails)}" for f in e.automation_flows]
    return "\n".join([
        _heading("EMAIL MARKETING"),
        f"Strategy: {e.strategy}",
        "",
        _labeled_list("Segmentation", e.segmentation),
        "",
        _labeled_list("Campaign Types", e.campaign_types),
        "",
        "Automation Flows:",
        "\n\n".join(flows),
    ])


def _kpis(a: MarketingAnalysis) -> str:
    kpis = [f"{k.metric}:\nTarget: {k.target}\nMeasurement: {k.measurement}" for k in a.metrics.kpis]
    return _heading("KEY PERFORMANCE INDICATORS") + "\n" + "\n\n".join(kpis)


def _action_plan(a: MarketingAnalysis) -> str:
    p = a.action_plan
    return "\n".join([
        _heading("ACTION PLAN"),
        _labeled_list("Immediate Actions (Week 1-2)", p.immediate),
        "",
        _labeled_list("Short-term Actions (Month 1-3)", p.short_term),
        "",
        _labeled_list("Long-term Actions (Month 4-12)", p.long_term),
    ])


SECTIONS = (_overview, _brand, _content, _seo, _social, _paid, _email, _kpis, _action_plan)


def render_report(analysis: MarketingAnalysis) -> str:
    """
    Full text report, sections in fixed order separated by one blank line.
    """
    blocks: List[str] = [_heading(REPORT_TITLE, "=")]
    blocks.extend(section(analysis) for section in SECTIONS)
    return "\n\n".join(blocks)
