"""
Prompt Builder
Type-specific analysis prompts embedding a bounded sample of the uploaded data
"""

import json
from collections import OrderedDict
from typing import Dict, List, Optional, Sequence

from retail_insights.core.models import AnalysisRequest, DataType, RowSet, StatsBlock
from retail_insights.core.prompts import SECTION_HEADINGS
from retail_insights.utils.logging_utils import get_logger

logger = get_logger(__name__)

DEFAULT_SAMPLE_ROWS = 10
DEFAULT_COMBINED_SAMPLE_ROWS = 2

# Bullet guidance under upper-case headings, per template
PURCHASE_ORDER_GUIDANCE: Dict[str, Sequence[str]] = {
    "keyInsights": (
        "Identify the top 3-5 most important patterns or issues in the purchase order data",
        "Highlight specific products or vendors that stand out (positively or negatively)",
        "Note any critical supply chain risks or opportunities",
    ),
    "inventoryAnalysis": (
        "How do these purchase orders align with optimal inventory levels?",
        "Are there signs of reactive ordering or strategic planning?",
        "Identify potential stockout or overstock risks",
    ),
    "inventoryRecommendations": (
        "Identify opportunities for order consolidation",
        "Suggest optimal order quantities",
        "Recommend changes to ordering frequency",
    ),
    "vendorAnalysis": (
        "Assess lead times by vendor",
        "Evaluate fill rates and order accuracy",
        "Compare vendor pricing and terms",
    ),
    "vendorRecommendations": (
        "Provide specific, actionable recommendations for each key vendor",
        "Prioritize recommendations by potential impact",
        "Include expected outcomes for each recommendation",
    ),
    "salesTrends": (
        "Analyze order frequency and volume patterns",
        "Identify any seasonality or cyclical ordering",
        "Evaluate order sizes and their efficiency",
    ),
    "salesForecasts": (
        "Project purchasing needs for the coming months",
        "Recommend order timing and quantity adjustments",
    ),
}

COMBINED_GUIDANCE: Dict[str, Sequence[str]] = {
    "keyInsights": (
        "Identify the top 3-5 most important patterns or issues across these datasets",
        "Highlight specific products or categories that stand out (positively or negatively)",
        "Note any critical supply chain risks or opportunities",
    ),
    "inventoryAnalysis": (
        "Which specific products have the highest/lowest turnover rates?",
        "Are there any products that appear overstocked or understocked?",
        "How well is inventory aligned with sales velocity?",
        "Identify any seasonal patterns in inventory levels",
    ),
    "inventoryRecommendations": (
        "Provide 3-5 specific, actionable steps to optimize inventory levels",
        "Suggest specific reorder points or safety stock adjustments for key products",
        "Recommend inventory management policy changes with expected outcomes",
    ),
    "vendorAnalysis": (
        "Evaluate specific vendor performance metrics (delivery time, fill rate, etc.)",
        "Compare vendors on key performance indicators",
        "Identify any vendor-related bottlenecks or risks",
    ),
    "vendorRecommendations": (
        "Suggest specific changes to vendor relationships or terms",
        "Recommend consolidation or diversification strategies if appropriate",
        "Provide a framework for ongoing vendor performance management",
    ),
    "salesTrends": (
        "Identify the best and worst performing products/categories",
        "Highlight any emerging trends or declining product lines",
        "Note correlations between marketing activities and sales performance",
    ),
    "salesForecasts": (
        "Provide specific forecasts for key product categories",
        "Recommend order timing and quantity adjustments",
        "Suggest ways to better align purchasing with sales cycles",
    ),
}

# One question per title-case heading, per template
SALES_QUESTIONS: Dict[str, str] = {
    "keyInsights": "What are the most important patterns or issues in this data?",
    "inventoryAnalysis": "What does this tell us about our inventory management?",
    "inventoryRecommendations": "What specific actions should we take to improve?",
    "vendorAnalysis": "What does this tell us about our product mix?",
    "vendorRecommendations": "How can we optimize our product mix?",
    "salesTrends": "What patterns do you see in the sales data?",
    "salesForecasts": "What should we expect in the coming months?",
}

INVENTORY_QUESTIONS: Dict[str, str] = {
    **SALES_QUESTIONS,
    "salesTrends": "What can we infer about sales patterns from stock levels?",
    "salesForecasts": "What inventory adjustments should we make in the coming months?",
}

GENERAL_QUESTIONS: Dict[str, str] = {
    **SALES_QUESTIONS,
    "salesTrends": "What sales patterns, if any, can be inferred?",
}

SPECIFICITY_CLOSING = (
    "Be specific and data-driven in your analysis. Mention actual product names, categories, "
    "and vendors from the data. Provide concrete numbers and percentages whenever possible."
)


def serialize_rows(rows: RowSet) -> str:
    """JSON sample block embedded in prompts"""
    return json.dumps(rows, indent=2, ensure_ascii=False, default=str)


def format_number(value: float) -> str:
    return f"{value:,.2f}"


class PromptBuilder:
    """Builds one prompt per analysis request"""

    def __init__(self, sample_rows: int = DEFAULT_SAMPLE_ROWS,
                 combined_sample_rows: int = DEFAULT_COMBINED_SAMPLE_ROWS):
        """
        Args:
            sample_rows: records embedded in single-type prompts
            combined_sample_rows: records per file embedded in the combined prompt
        """
        self.sample_rows = sample_rows
        self.combined_sample_rows = combined_sample_rows

    def build_prompt(self, request: AnalysisRequest, stats: Optional[StatsBlock] = None) -> str:
        """
        Select and render the template for request.type

        Args:
            request: analysis request
            stats: pre-computed statistics (optional)

        Returns:
            prompt text
        """
        builders = {
            DataType.COMBINED: self._combined_prompt,
            DataType.PURCHASE_ORDERS: self._purchase_order_prompt,
            DataType.SALES_DATA: self._sales_prompt,
            DataType.INVENTORY: self._inventory_prompt,
        }
        builder = builders.get(request.type, self._general_prompt)
        prompt = builder(request, stats)

        logger.created(f"Prompt built for {request.type.value}: {len(prompt)} chars")
        return prompt

    # === section lists ===

    @staticmethod
    def _bulleted_sections(guidance: Dict[str, Sequence[str]]) -> str:
        blocks = []
        for position, heading in enumerate(SECTION_HEADINGS, 1):
            lines = [f"{heading.numbered(position, upper=True)}:"]
            lines.extend(f"   - {item}" for item in guidance.get(heading.key, ()))
            blocks.append("\n".join(lines))
        return "\n\n".join(blocks)

    @staticmethod
    def _question_sections(questions: Dict[str, str]) -> str:
        return "\n".join(
            f"{heading.numbered(position)}: {questions.get(heading.key, '')}".rstrip()
            for position, heading in enumerate(SECTION_HEADINGS, 1)
        )

    # === shared blocks ===

    def _sample_block(self, request: AnalysisRequest) -> str:
        rows = request.rows
        return "\n".join([
            "Here's a sample of the data:",
            serialize_rows(rows[:self.sample_rows]),
            "",
            f"Total records: {len(rows)}",
        ])

    @staticmethod
    def _stats_block(stats: Optional[StatsBlock]) -> str:
        if stats is None or stats.file_stats is not None:
            return ""

        lines = []
        if stats.column_names:
            lines.append(f"- Columns: {', '.join(str(c) for c in stats.column_names)}")
        if stats.total_sales is not None:
            lines.append(f"- Total {stats.sales_column}: {format_number(stats.total_sales)}")
            lines.append(f"- Average {stats.sales_column} per record: {format_number(stats.avg_sale)}")
        if stats.top_products:
            top = ", ".join(f"{p['name']} ({p['count']})" for p in stats.top_products)
            lines.append(f"- Most frequent {stats.product_column} values: {top}")

        if not lines:
            return ""
        return "Pre-computed statistics (use these instead of recalculating):\n" + "\n".join(lines)

    def _single_type_prompt(self, request: AnalysisRequest, stats: Optional[StatsBlock],
                            subject: str, instruction: str, sections: str, closing: str) -> str:
        parts = [
            f"I have {subject} for a mobile retail store{request.location_text}.",
            self._sample_block(request),
            self._stats_block(stats),
            instruction,
            sections,
            closing,
        ]
        return "\n\n".join(part for part in parts if part)

    # === templates ===

    def _purchase_order_prompt(self, request: AnalysisRequest, stats: Optional[StatsBlock]) -> str:
        return self._single_type_prompt(
            request, stats,
            subject="purchase order data",
            instruction=("As a senior supply chain expert, provide a detailed analysis of this "
                         "purchase order data, including:"),
            sections=self._bulleted_sections(PURCHASE_ORDER_GUIDANCE),
            closing=SPECIFICITY_CLOSING
        )

    def _sales_prompt(self, request: AnalysisRequest, stats: Optional[StatsBlock]) -> str:
        return self._single_type_prompt(
            request, stats,
            subject="sales data",
            instruction=("Provide a comprehensive analysis of this sales data from a supply chain "
                         "perspective, including:"),
            sections=self._question_sections(SALES_QUESTIONS),
            closing="Please be specific and actionable in your recommendations."
        )

    def _inventory_prompt(self, request: AnalysisRequest, stats: Optional[StatsBlock]) -> str:
        return self._single_type_prompt(
            request, stats,
            subject="inventory data",
            instruction=("Provide a comprehensive analysis of this inventory data from a supply chain "
                         "perspective, including:"),
            sections=self._question_sections(INVENTORY_QUESTIONS),
            closing="Please be specific and actionable in your recommendations."
        )

    def _general_prompt(self, request: AnalysisRequest, stats: Optional[StatsBlock]) -> str:
        return self._single_type_prompt(
            request, stats,
            subject="retail data",
            instruction=("Provide a comprehensive analysis of this data from a supply chain perspective, "
                         "including any actionable insights and recommendations:"),
            sections=self._question_sections(GENERAL_QUESTIONS),
            closing="Please be specific and actionable in your recommendations."
        )

    @staticmethod
    def describe_file_types(request: AnalysisRequest) -> str:
        """'2 sales files, 1 inventory file' in first-seen order"""
        counts: "OrderedDict[DataType, int]" = OrderedDict()
        for file in request.files:
            counts[file.type] = counts.get(file.type, 0) + 1

        return ", ".join(
            f"{count} {data_type.label} {'file' if count == 1 else 'files'}"
            for data_type, count in counts.items()
        )

    def _combined_prompt(self, request: AnalysisRequest, stats: Optional[StatsBlock]) -> str:
        files = request.files
        samples: List[str] = [
            f"--- {file.type.value.upper()} DATA ({file.file_name}) ---\n"
            f"{serialize_rows(file.data[:self.combined_sample_rows])}"
            for file in files
        ]
        row_word = "row" if self.combined_sample_rows == 1 else "rows"

        parts = [
            f"I have multiple retail data files for a mobile store{request.location_text}.",
            f"The dataset includes {self.describe_file_types(request)}.",
            (f"Here's a sample from each type of data (limited to "
             f"{self.combined_sample_rows} {row_word} per file):"),
            "\n\n".join(samples),
            f"Total files: {len(files)}\nTotal records across all files: {request.total_records}",
            ("Provide a comprehensive cross-analysis of this data from a supply chain perspective. "
             "Your analysis should include:"),
            self._bulleted_sections(COMBINED_GUIDANCE),
            (f"{SPECIFICITY_CLOSING} Your recommendations should be immediately actionable by a "
             f"retail supply chain manager."),
            ('IMPORTANT: Format your response with clear numbered section headings exactly as listed '
             'above (e.g., "1. KEY INSIGHTS:", "2. INVENTORY ANALYSIS:") and use HTML formatting '
             '(<p>, <ul>, <li>) for better readability. Make sure each section contains detailed '
             'textual analysis, not just data points.'),
        ]
        return "\n\n".join(part for part in parts if part)


def build_prompt(request: AnalysisRequest, stats: Optional[StatsBlock] = None) -> str:
    """Build a prompt with the default sample sizes"""
    return PromptBuilder().build_prompt(request, stats)
