"""Prebuilt tool families.

Includes:
- Calculator: arithmetic with NaN-valued error results
- Weather: deterministic simulated readings and forecasts
- Todo: in-process todo list
- Product: in-process product store
- Catalog: proxy to the external product catalog API
- Text: analysis, case conversion and extraction
"""

from .calculator import register_calculator_tools
from .catalog import CatalogClient, CatalogTools, register_catalog_tools
from .product import ProductStore, ProductTools, register_product_tools
from .text import register_text_tools
from .todo import TodoStore, TodoTools, register_todo_tools
from .weather import WeatherTools, register_weather_tools

__all__ = [
    # Calculator
    "register_calculator_tools",
    # Weather
    "WeatherTools",
    "register_weather_tools",
    # Todo
    "TodoStore",
    "TodoTools",
    "register_todo_tools",
    # Product
    "ProductStore",
    "ProductTools",
    "register_product_tools",
    # Catalog
    "CatalogClient",
    "CatalogTools",
    "register_catalog_tools",
    # Text
    "register_text_tools",
]
