"""
Larder meal-plan reconciliation package.

The package turns a weekly meal plan into a consolidated, categorized shopping list and
reconciles that list against what is already in the pantry.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
