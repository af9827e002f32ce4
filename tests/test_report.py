"""Tests for the markdown summary."""

from agentaudit.scoring.factors import FailOn, Rating
from agentaudit.scoring.resolver import NOT_FOUND_REASON, ResolvedResult
from agentaudit.services.report import ISSUES_WARNING, render_summary


def _found(slug, rating, exceeds=False, name=None):
    return ResolvedResult(
        slug=slug,
        found=True,
        rating=rating,
        exceeds=exceeds,
        name=name or slug,
        url=f"https://www.agentaudit.dev/packages/{slug}",
    )


def _missing(slug, exceeds=False):
    return ResolvedResult(slug=slug, found=False, rating=Rating.UNKNOWN, exceeds=exceeds, reason=NOT_FOUND_REASON)


class TestRenderSummary:
    """Tests for render_summary."""

    def test_full_layout(self):
        results = [
            _found("left-pad", Rating.SAFE),
            _found("evil-pkg", Rating.UNSAFE, exceeds=True, name="Evil Package"),
            _missing("ghost"),
        ]
        text, issues = render_summary(results, FailOn.UNSAFE)

        assert issues is True
        assert text == (
            "## 🛡️ AgentAudit Security Scan Results\n"
            "\n"
            "| Package | Rating | Status |\n"
            "|---------|--------|--------|\n"
            "| [left-pad](https://www.agentaudit.dev/packages/left-pad) | ✅ safe | ✅ OK |\n"
            "| [Evil Package](https://www.agentaudit.dev/packages/evil-pkg) | 🚨 unsafe | ❌ Exceeds threshold |\n"
            "| ghost | ❓ unknown | ❓ Not in database |\n"
            "\n"
            "**Threshold:** fail on `unsafe` | **Scanned:** 3 packages\n"
            "\n"
            "> ⚠️ **Some packages exceed the configured risk threshold!**\n"
        )

    def test_no_issues_has_no_warning(self):
        text, issues = render_summary([_found("ok", Rating.SAFE)], FailOn.CAUTION)
        assert issues is False
        assert ISSUES_WARNING not in text
        assert "fail on `caution`" in text
        assert text.endswith("**Scanned:** 1 packages\n")

    def test_caution_symbol(self):
        text, _ = render_summary([_found("meh", Rating.CAUTION)], FailOn.UNSAFE)
        assert "| ⚠️ caution | ✅ OK |" in text

    def test_not_found_status_wins_over_exceeds(self):
        text, issues = render_summary([_missing("ghost", exceeds=True)], FailOn.ANY)
        assert issues is True
        assert "| ghost | ❓ unknown | ❓ Not in database |" in text
        assert ISSUES_WARNING in text

    def test_empty_results(self):
        text, issues = render_summary([], FailOn.UNSAFE)
        assert issues is False
        assert "**Scanned:** 0 packages" in text

    def test_does_not_mutate_results(self):
        results = [_found("a", Rating.UNSAFE, exceeds=True)]
        before = [r.to_dict() for r in results]
        render_summary(results, FailOn.UNSAFE)
        assert [r.to_dict() for r in results] == before
