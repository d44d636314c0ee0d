"""
Retail Insights
Mobile-retail spreadsheet analysis backend (classification, prompting, LLM response parsing)
"""

__version__ = '0.1.0'
