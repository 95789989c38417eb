"""Normalization pipeline for imported article HTML.

Provides rule-set registration per platform and the two-stage run:
platform rules first, then the universal pass.
"""

from typing import Any

from bublr_import.core.exceptions import TransformFailure
from bublr_import.normalizer.platforms import PLATFORM_RULES
from bublr_import.normalizer.render import parse
from bublr_import.normalizer.rules import Rule
from bublr_import.normalizer.schema import NormalizationResult, Platform
from bublr_import.normalizer.universal import UNIVERSAL_RULES, finalize


class NormalizationPipeline:
    """Pipeline for normalizing article HTML from various platforms.

    Holds one ordered rule set per platform. Platforms without a registered
    rule set, and unrecognized identifiers, get the universal pass only.
    """

    def __init__(self, rule_sets: dict[Platform, tuple[Rule, ...]] | None = None):
        """Initialize the pipeline.

        Args:
            rule_sets: Initial platform rule sets. Defaults to the built-in sets.
        """
        source = PLATFORM_RULES if rule_sets is None else rule_sets
        self._rule_sets: dict[Platform, tuple[Rule, ...]] = dict(source)

    def register_rules(self, platform: Platform, rules: tuple[Rule, ...]) -> None:
        """Register (or replace) the rule set for a platform.

        Args:
            platform: Platform the rules apply to.
            rules: Ordered rules; run before the universal pass.
        """
        self._rule_sets[platform] = tuple(rules)

    def rules_for(self, platform: Any) -> tuple[Rule, ...]:
        """Return the rule set that runs for ``platform`` (empty if none)."""
        return self._rule_sets.get(Platform.resolve(platform), ())

    def list_platforms(self) -> list[Platform]:
        """List all platforms with a registered rule set.

        Returns:
            List of Platform values.
        """
        return list(self._rule_sets.keys())

    def run(self, html: str, platform: Any = Platform.MEDIUM) -> NormalizationResult:
        """Normalize ``html`` for ``platform``.

        Args:
            html: Raw article HTML. Empty input yields empty output.
            platform: Platform member or identifier; unknown values run generic.

        Returns:
            NormalizationResult with the cleaned HTML and per-rule rewrite counts.

        Raises:
            TransformFailure: If a rule raised unexpectedly. No partial output
                is produced.
        """
        resolved = Platform.resolve(platform)
        if not html:
            return NormalizationResult(html="", platform=resolved)

        rewrites: dict[str, int] = {}
        rule_name = None
        try:
            soup = parse(html)
            for rule in self.rules_for(resolved) + UNIVERSAL_RULES:
                rule_name = rule.name
                count = rule.apply(soup)
                if count:
                    rewrites[rule.name] = rewrites.get(rule.name, 0) + count
            rule_name = None
            cleaned = finalize(soup)
        except Exception as e:
            raise TransformFailure(resolved.value, str(e), rule=rule_name) from e

        return NormalizationResult(html=cleaned, platform=resolved, rewrites=rewrites)


_default_pipeline = NormalizationPipeline()


def get_pipeline() -> NormalizationPipeline:
    """Return the shared pipeline with the built-in rule sets."""
    return _default_pipeline


def normalize(html: str, platform: Any = Platform.MEDIUM) -> str:
    """Convert platform HTML into editor-compatible HTML.

    Args:
        html: Raw article HTML.
        platform: Source platform (defaults to Medium). Unrecognized values
            fall back to generic cleaning.

    Returns:
        Cleaned HTML string.
    """
    return _default_pipeline.run(html, platform).html
