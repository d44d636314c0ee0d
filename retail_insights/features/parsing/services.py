"""
Response Parser
Recovers sections, metrics and chart series from free-text completion output

Section extraction tries every heading synonym of a section in order, first
as a numbered heading ("2. INVENTORY ANALYSIS:") and then as a bare heading
("INVENTORY ANALYSIS:"). The first synonym yielding non-empty text wins.
When no section at all is found the whole answer becomes keyInsights.

Metrics are regex scans with literal placeholder defaults, and chart series
are fixed illustrative placeholders; neither is derived from the dataset.
"""

import copy
import re
from typing import Any, Dict, List, Optional, Pattern, Tuple

from retail_insights.core.models import AnalysisResult, DataType
from retail_insights.core.prompts import SECTION_HEADINGS, SectionHeading
from retail_insights.utils.logging_utils import get_logger

logger = get_logger(__name__)

# Body runs until the next "N. Capitalized" heading or end of text
NUMBERED_HEADING = r'\d+\.\s*{heading}[:\s]+(.*?)(?=\d+\.\s+[A-Z]|\Z)'
# Body also stops at an ALL CAPS heading followed by a colon
UNNUMBERED_HEADING = r'{heading}[:\s]+(.*?)(?=\d+\.\s+[A-Z]|[A-Z][A-Z\s]+:|\Z)'

# (metric key, pattern, placeholder default)
METRIC_PATTERNS: Tuple[Tuple[str, str, str], ...] = (
    ("inventoryTurnover", r'inventory turnover.*?(\d+\.?\d*)', "4.2"),
    ("fulfillmentRate", r'fulfillment rate.*?(\d+\.?\d*%)', "92.5%"),
    ("avgDaysOnOrder", r'average days on order.*?(\d+\.?\d*)', "6.3"),
    ("stockoutRate", r'stockout rate.*?(\d+\.?\d*%)', "3.2%"),
)

# (metric key, pattern) with groups (qualifier, name)
TOP_ITEM_PATTERNS: Tuple[Tuple[str, str], ...] = (
    ("topCategory", r'top (performing|selling) category.*?is ([\w\s]+)'),
    ("topProduct", r'top (performing|selling) product.*?is ([\w\s]+)'),
)
TOP_ITEM_DEFAULT = "N/A"

PLACEHOLDER_CHARTS: Dict[str, List[Dict[str, Any]]] = {
    "inventoryTurnover": [
        {"product": "iPhone 14 Pro", "turnover": 5.2},
        {"product": "Samsung S23", "turnover": 4.8},
        {"product": "Apple Watch", "turnover": 3.9},
        {"product": "USB-C Cables", "turnover": 6.7},
        {"product": "Wall Chargers", "turnover": 5.5},
    ],
    "categoryPerformance": [
        {"category": "Smartphones", "value": 45},
        {"category": "Accessories", "value": 25},
        {"category": "Cables", "value": 15},
        {"category": "Chargers", "value": 10},
        {"category": "Other", "value": 5},
    ],
    "vendorPerformance": [
        {"vendor": "Apple", "onTimeDelivery": 96, "orderFulfillment": 98},
        {"vendor": "Samsung", "onTimeDelivery": 92, "orderFulfillment": 95},
        {"vendor": "Accessory Vendor A", "onTimeDelivery": 88, "orderFulfillment": 92},
        {"vendor": "Accessory Vendor B", "onTimeDelivery": 85, "orderFulfillment": 90},
    ],
    "salesVsPurchases": [
        {"month": "Jul 2023", "sales": 45000, "purchases": 40000},
        {"month": "Aug 2023", "sales": 48000, "purchases": 42000},
        {"month": "Sep 2023", "sales": 50000, "purchases": 45000},
        {"month": "Oct 2023", "sales": 53000, "purchases": 48000},
        {"month": "Nov 2023", "sales": 58000, "purchases": 52000},
        {"month": "Dec 2023", "sales": 65000, "purchases": 58000},
    ],
}


def compile_heading_patterns(heading: SectionHeading) -> List[Tuple[str, Pattern, Pattern]]:
    """(synonym, numbered pattern, unnumbered pattern) for every synonym, in order"""
    patterns = []
    for synonym in heading.synonyms:
        escaped = re.escape(synonym)
        patterns.append((
            synonym,
            re.compile(NUMBERED_HEADING.format(heading=escaped), re.DOTALL),
            re.compile(UNNUMBERED_HEADING.format(heading=escaped), re.DOTALL),
        ))
    return patterns


SECTION_PATTERNS: Dict[str, List[Tuple[str, Pattern, Pattern]]] = {
    heading.key: compile_heading_patterns(heading) for heading in SECTION_HEADINGS
}


def extract_section(text: str, patterns: List[Tuple[str, Pattern, Pattern]]) -> str:
    """
    Text under the first matching heading synonym

    Returns:
        trimmed section body, or an empty string
    """
    for _synonym, numbered, unnumbered in patterns:
        for pattern in (numbered, unnumbered):
            match = pattern.search(text)
            if match and match.group(1).strip():
                return match.group(1).strip()
    return ''


def extract_metric(text: str, pattern: str, default: str) -> str:
    match = re.search(pattern, text, re.IGNORECASE)
    return match.group(1) if match else default


def extract_top_item(text: str, pattern: str) -> str:
    match = re.search(pattern, text, re.IGNORECASE)
    if not match:
        return TOP_ITEM_DEFAULT
    return match.group(2).strip() or TOP_ITEM_DEFAULT


def placeholder_charts() -> Dict[str, List[Dict[str, Any]]]:
    """Fresh copy of the placeholder series (results never share buffers)"""
    return copy.deepcopy(PLACEHOLDER_CHARTS)


class ResponseParser:
    """Completion text -> AnalysisResult"""

    def extract_sections(self, text: str) -> Dict[str, str]:
        sections = {key: extract_section(text, patterns) for key, patterns in SECTION_PATTERNS.items()}

        if not any(sections.values()) and text:
            logger.warning("No sections extracted, using full text")
            sections["keyInsights"] = text

        return sections

    def extract_metrics(self, text: str) -> Dict[str, str]:
        metrics = {key: extract_metric(text, pattern, default) for key, pattern, default in METRIC_PATTERNS}
        for key, pattern in TOP_ITEM_PATTERNS:
            metrics[key] = extract_top_item(text, pattern)
        return metrics

    def parse(self, raw_text: Optional[str], data_type: DataType = DataType.UNKNOWN) -> AnalysisResult:
        """
        Parse a completion answer

        Args:
            raw_text: completion text (None is treated as empty)
            data_type: type of the analysed data

        Returns:
            AnalysisResult; never raises
        """
        text = raw_text if isinstance(raw_text, str) else ('' if raw_text is None else str(raw_text))
        logger.processing(f"Parsing {DataType.from_value(data_type).value} response: {len(text)} chars")

        sections = self.extract_sections(text)
        logger.stats(f"Extracted sections: {[key for key, value in sections.items() if value]}")

        return AnalysisResult(
            sections=sections,
            metrics=self.extract_metrics(text),
            charts=placeholder_charts()
        )


def parse(raw_text: Optional[str], data_type: DataType = DataType.UNKNOWN) -> AnalysisResult:
    return ResponseParser().parse(raw_text, data_type)
