"""Unit tests for NormalizationPipeline and the normalize entry point."""

import re

import pytest

from bublr_import.core.exceptions import TransformFailure
from bublr_import.normalizer import (
    NormalizationPipeline,
    Platform,
    Rule,
    normalize,
    universal_clean,
)

ALL_PLATFORMS = [platform.value for platform in Platform]

EDITOR_TAGS = {
    "p", "h1", "h2", "h3", "blockquote", "pre", "code", "ul", "ol", "li",
    "a", "img", "br", "strong", "em", "b", "i", "div", "span", "figure",
    "figcaption", "table", "tr", "td",
}

FEED_DOCUMENT = (
    '<h1 class="title">Title</h1>'
    '<h6 id="deep">Deep</h6>'
    '<figure class="kg-card kg-image-card"><img src="https://ex.com/a.png" class="c"></figure>'
    '<div class="captioned-image-container"><figure><img src="https://ex.com/b.png"></figure></div>'
    '<p style="margin:0" data-x="1">Text <a href="https://ex.com" target="_blank">link</a></p>'
    "<script>alert(1)</script><hr>"
    '<ul class="list"><li data-i="1">Item</li></ul>'
)


class TestPipelineRegistry:
    """Rule-set registration and lookup."""

    def test_builtin_platforms_registered(self, pipeline):
        """Every platform, generic included, has a rule set."""
        assert set(pipeline.list_platforms()) == set(Platform)

    def test_generic_has_no_platform_rules(self, pipeline):
        """Generic runs the universal pass only."""
        assert pipeline.rules_for(Platform.GENERIC) == ()

    def test_rules_for_accepts_strings(self, pipeline):
        """Identifiers resolve case-insensitively."""
        assert pipeline.rules_for(" Medium ") == pipeline.rules_for(Platform.MEDIUM)

    def test_register_rules_replaces_set(self, pipeline):
        """A registered set replaces the built-in one for that platform."""
        rule = Rule("drop-everything", lambda soup: 0)

        pipeline.register_rules(Platform.MEDIUM, [rule])

        assert pipeline.rules_for("medium") == (rule,)

    def test_register_does_not_leak_between_pipelines(self, pipeline):
        """Registering on one pipeline leaves the shared default alone."""
        pipeline.register_rules(Platform.MEDIUM, ())

        assert normalize('<img src="https://medium.com/stat/abc">', "medium") == ""
        assert pipeline.run('<img src="https://medium.com/stat/abc">', "medium").html == (
            '<img src="https://medium.com/stat/abc" />'
        )


class TestPipelineRun:
    """Behavior of a single normalization run."""

    @pytest.mark.parametrize("platform", ALL_PLATFORMS)
    def test_empty_input_yields_empty_output(self, pipeline, platform):
        """Empty input short-circuits for every platform."""
        result = pipeline.run("", platform)

        assert result.html == ""
        assert result.rewrites == {}

    def test_none_input_yields_empty_output(self, pipeline):
        """None is treated like empty input."""
        assert pipeline.run(None, "medium").html == ""

    @pytest.mark.parametrize("platform", ["medium", "MEDIUM", Platform.MEDIUM])
    def test_platform_identifiers_resolve(self, pipeline, platform):
        """Members and case variants select the same rule set."""
        assert pipeline.run("<p>x</p>", platform).platform is Platform.MEDIUM

    @pytest.mark.parametrize("platform", ["myspace", "", None, 42])
    def test_unknown_platform_runs_generic(self, pipeline, platform):
        """Unrecognized identifiers fall back to generic cleaning."""
        html = '<figure class="c"><img src="https://ex.com/u.png"></figure><h5>T</h5>'
        result = pipeline.run(html, platform)

        assert result.platform is Platform.GENERIC
        assert result.html == pipeline.run(html, "generic").html
        assert result.html == universal_clean(html)

    def test_generic_keeps_figures(self, pipeline):
        """Without platform rules a figure is only stripped of presentation."""
        html = '<figure class="c"><img src="https://ex.com/u.png"></figure>'

        assert pipeline.run(html, "generic").html == '<figure><img src="https://ex.com/u.png" /></figure>'

    def test_rewrites_are_counted_per_rule(self, pipeline):
        """Each rule reports how many elements it rewrote."""
        html = '<figure><img src="a"></figure><figure><img src="b"></figure><h5>T</h5><hr>'
        result = pipeline.run(html, "medium")

        assert result.rewrites["medium-figures"] == 2
        assert result.rewrites["demote-headings"] == 1
        assert result.rewrites["drop-rules"] == 1
        assert result.total_rewrites == sum(result.rewrites.values())
        assert all(count > 0 for count in result.rewrites.values())

    def test_clean_input_records_no_rewrites(self, pipeline):
        """Already-clean markup passes through untouched."""
        result = pipeline.run("<p>Plain</p>", "medium")

        assert result.html == "<p>Plain</p>"
        assert result.rewrites == {}

    @pytest.mark.parametrize("platform", ALL_PLATFORMS)
    def test_unclosed_paragraphs_do_not_fail(self, pipeline, platform):
        """Long posts relying on implied end tags convert on every platform."""
        html = "".join(f"<p>para {i}" for i in range(2000))

        result = pipeline.run(html, platform)

        assert result.html == "".join(f"<p>para {i}</p>" for i in range(2000))


class TestTransformFailure:
    """Unexpected rule errors surface as TransformFailure."""

    @staticmethod
    def _boom(soup):
        raise RuntimeError("rule exploded")

    def test_failure_names_rule_and_platform(self, pipeline):
        """The failing rule and platform are attached to the error."""
        pipeline.register_rules(Platform.GHOST, (Rule("boom", self._boom),))

        with pytest.raises(TransformFailure) as exc_info:
            pipeline.run("<p>x</p>", "ghost")

        assert exc_info.value.rule == "boom"
        assert exc_info.value.platform == "ghost"
        assert exc_info.value.message == "rule exploded"
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_empty_input_skips_rules(self, pipeline):
        """No rule runs on empty input, so nothing can fail."""
        pipeline.register_rules(Platform.GHOST, (Rule("boom", self._boom),))

        assert pipeline.run("", "ghost").html == ""


class TestOutputProperties:
    """Properties that hold for every platform's output."""

    @pytest.mark.parametrize("platform", ALL_PLATFORMS)
    def test_no_presentation_attributes_survive(self, platform):
        """class, style, id and data-* never reach the output."""
        output = normalize(FEED_DOCUMENT, platform)

        assert not re.search(r"\s(class|style|id|data-[\w-]+)=", output)

    @pytest.mark.parametrize("platform", ALL_PLATFORMS)
    def test_no_scripts_rules_or_deep_headings(self, platform):
        """Removed and demoted elements never reach the output."""
        output = normalize(FEED_DOCUMENT, platform)

        assert "<script" not in output
        assert "<hr" not in output
        assert not re.search(r"<h[4-6]", output)
        assert "<h3>Deep</h3>" in output

    @pytest.mark.parametrize("platform", ALL_PLATFORMS)
    def test_links_carry_only_href(self, platform):
        """Every surviving link has href as its only attribute."""
        output = normalize(FEED_DOCUMENT, platform)

        assert '<a href="https://ex.com">link</a>' in output
        assert "target=" not in output

    @pytest.mark.parametrize("platform", ALL_PLATFORMS)
    def test_output_tags_stay_in_vocabulary(self, platform):
        """Only editor tags, or untargeted tags passed through, appear."""
        output = normalize(FEED_DOCUMENT, platform)

        assert set(re.findall(r"<([a-z0-9]+)", output)) <= EDITOR_TAGS

    def test_figure_with_image_becomes_single_image(self):
        """A figure around an image yields exactly one bare image."""
        html = '<figure><img src="https://x/y.png" class="c"></figure>'

        assert normalize(html, "medium") == '<img src="https://x/y.png" />'

    @pytest.mark.parametrize("platform", ALL_PLATFORMS)
    def test_normalize_is_stable_under_universal_clean(self, platform):
        """Normalized output is a fixed point of the universal pass."""
        output = normalize(FEED_DOCUMENT, platform)

        assert universal_clean(output) == output
