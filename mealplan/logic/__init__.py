"""Core business logic layer for building a day's meal plan.

Subpackages:
- catalog: location filtering and breakfast/lunch/dinner slot classification
- prompting: composing the text prompt sent to the generation service
- planning: mapping model output back to catalog meals, and the end-to-end service
"""
__all__ = ["catalog", "prompting", "planning"]
