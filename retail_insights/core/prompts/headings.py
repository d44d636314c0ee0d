"""
Analysis section headings

Single source of the heading vocabulary: the prompt builder requests
sections with these titles and the response parser looks for the same
titles (plus synonyms) in the completion text.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class SectionHeading:
    """One analysis section

    Attributes:
        key: result key (camelCase, consumed by the UI)
        title: canonical heading requested in prompts
        aliases: extra headings accepted by the parser, in priority order
    """
    key: str
    title: str
    aliases: Tuple[str, ...] = ()

    @property
    def synonyms(self) -> Tuple[str, ...]:
        """Parser vocabulary: title, upper-case title, then aliases"""
        ordered = [self.title, self.title.upper()]
        for alias in self.aliases:
            if alias not in ordered:
                ordered.append(alias)
        return tuple(ordered)

    def numbered(self, position: int, upper: bool = False) -> str:
        """'3. Inventory Recommendations' / '3. INVENTORY RECOMMENDATIONS'"""
        return f"{position}. {self.title.upper() if upper else self.title}"


SECTION_HEADINGS: Tuple[SectionHeading, ...] = (
    SectionHeading("keyInsights", "Key Insights", ("Important Insights", "Summary")),
    SectionHeading("inventoryAnalysis", "Inventory Analysis"),
    SectionHeading("inventoryRecommendations", "Inventory Recommendations"),
    SectionHeading("vendorAnalysis", "Vendor Analysis", ("Vendor Performance",)),
    SectionHeading("vendorRecommendations", "Vendor Recommendations"),
    SectionHeading("salesTrends", "Sales Trends"),
    SectionHeading("salesForecasts", "Sales Forecasts", ("Sales Forecast", "Forecasting")),
)

SECTION_KEYS: Tuple[str, ...] = tuple(heading.key for heading in SECTION_HEADINGS)
