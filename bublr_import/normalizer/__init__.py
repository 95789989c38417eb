"""Content normalizer for imported articles.

Converts HTML from Medium, Substack, Blogger, Hashnode, WordPress, Ghost and
DEV.to into the tag vocabulary accepted by the TipTap editor.

Example:
    from bublr_import.normalizer import normalize

    html = normalize(feed_item["content"], "substack")
"""

from bublr_import.normalizer.pipeline import NormalizationPipeline, get_pipeline, normalize
from bublr_import.normalizer.platforms import PLATFORM_RULES
from bublr_import.normalizer.rules import Rule
from bublr_import.normalizer.schema import NormalizationResult, Platform
from bublr_import.normalizer.universal import UNIVERSAL_RULES, universal_clean

__all__ = [
    "NormalizationPipeline",
    "NormalizationResult",
    "Platform",
    "PLATFORM_RULES",
    "Rule",
    "UNIVERSAL_RULES",
    "get_pipeline",
    "normalize",
    "universal_clean",
]
