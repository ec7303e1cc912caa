"""Grocery section classifier for shopping list items."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Sequence, Tuple

from larder.models.shopping import CategoryGroup, ConsolidatedItem, FoodCategory

PRODUCE = FoodCategory(name="Produce", icon="🥬", order=1)
MEAT = FoodCategory(name="Meat & Seafood", icon="🥩", order=2)
DAIRY = FoodCategory(name="Dairy & Eggs", icon="🥛", order=3)
GRAINS = FoodCategory(name="Grains & Pasta", icon="🌾", order=4)
CANNED = FoodCategory(name="Canned & Jarred", icon="🥫", order=5)
SEASONINGS = FoodCategory(name="Seasonings & Spices", icon="🧂", order=6)
OILS = FoodCategory(name="Oils & Condiments", icon="🫒", order=7)
BAKING = FoodCategory(name="Snacks & Baking", icon="🍪", order=8)
FROZEN = FoodCategory(name="Frozen", icon="🧊", order=9)
OTHER = FoodCategory(name="Other", icon="❓", order=10)


@dataclass(frozen=True)
class KeywordRule:
    """Matches when any keyword is a substring of the lowercased name."""

    keywords: Tuple[str, ...]

    def __call__(self, name: str) -> bool:
        return any(keyword in name for keyword in self.keywords)


# First match wins: narrow sections ("garlic powder") are checked before broad ones
# ("garlic") so seasonings never fall through to produce.
CATEGORY_RULES: Tuple[Tuple[KeywordRule, FoodCategory], ...] = (
    (
        KeywordRule(
            (
                "salt", "pepper", "cumin", "paprika", "oregano", "basil", "thyme",
                "cinnamon", "nutmeg", "clove", "cardamom", "curry", "turmeric",
                "coriander", "chili powder", "garlic powder", "onion powder",
                "seasoning", "spice", "herb", "cayenne", "red pepper flakes",
                "bay leaf", "sage", "marjoram", "tarragon", "allspice", "vanilla",
            )
        ),
        SEASONINGS,
    ),
    (
        KeywordRule(
            (
                "oil", "olive oil", "vegetable oil", "coconut oil", "sesame oil",
                "vinegar", "balsamic", "soy sauce", "worcestershire", "hot sauce",
                "ketchup", "mustard", "mayo", "mayonnaise", "ranch", "dressing",
                "honey", "maple syrup", "molasses", "tahini", "peanut butter",
            )
        ),
        OILS,
    ),
    (
        KeywordRule(
            (
                "sugar", "brown sugar", "powdered sugar", "baking powder",
                "baking soda", "yeast", "cornstarch", "chocolate chip", "cocoa",
                "chocolate", "chips", "cookie", "cake", "frosting", "sprinkles",
                "extract", "vanilla extract", "almond extract",
            )
        ),
        BAKING,
    ),
    (
        KeywordRule(
            (
                "canned", "can", "jar", "jarred", "sauce", "salsa", "marinara",
                "tomato sauce", "paste", "diced tomatoes", "crushed tomatoes",
                "beans", "chickpeas", "black beans", "kidney beans",
                "broth", "stock", "soup", "coconut milk", "condensed",
            )
        ),
        CANNED,
    ),
    (
        KeywordRule(
            (
                "chicken", "beef", "pork", "turkey", "lamb", "steak", "ground",
                "bacon", "sausage", "ham", "fish", "salmon", "tuna", "shrimp",
                "crab", "lobster", "tilapia", "cod", "meat", "breast", "thigh",
                "ribeye", "sirloin", "tenderloin", "ribs", "brisket",
            )
        ),
        MEAT,
    ),
    (
        KeywordRule(
            (
                "milk", "cheese", "butter", "cream", "yogurt", "sour cream",
                "cottage cheese", "mozzarella", "cheddar", "parmesan", "feta",
                "egg", "eggs", "half and half", "whipping cream", "ice cream",
            )
        ),
        DAIRY,
    ),
    (
        KeywordRule(
            (
                "rice", "pasta", "noodle", "bread", "flour", "oat", "quinoa",
                "couscous", "barley", "tortilla", "pita", "bagel", "roll",
                "spaghetti", "macaroni", "penne", "linguine", "fettuccine",
                "cereal", "granola", "crackers", "wheat", "grain",
            )
        ),
        GRAINS,
    ),
    (
        KeywordRule(
            (
                "frozen", "ice", "popsicle", "ice cream", "frozen vegetables",
                "frozen fruit", "frozen pizza", "frozen meal",
            )
        ),
        FROZEN,
    ),
    (
        KeywordRule(
            (
                "tomato", "lettuce", "onion", "garlic", "pepper", "carrot", "celery",
                "potato", "broccoli", "spinach", "cucumber", "zucchini", "mushroom",
                "apple", "banana", "lemon", "lime", "orange", "berry", "strawberry",
                "avocado", "corn", "peas", "bean", "cabbage", "kale", "arugula",
                "radish", "beet", "turnip", "squash", "pumpkin", "eggplant",
                "cilantro", "parsley", "basil", "mint", "thyme", "rosemary", "dill",
                "scallion", "shallot", "leek", "ginger", "jalapeño", "chile", "chili",
            )
        ),
        PRODUCE,
    ),
)

CATEGORIES: Tuple[FoodCategory, ...] = tuple(
    sorted({category for _, category in CATEGORY_RULES} | {OTHER}, key=lambda c: c.order)
)


def categorize(name: Any) -> FoodCategory:
    """Assign the grocery section an ingredient name is shelved in."""

    if not isinstance(name, str):
        return OTHER
    lowered = name.lower()
    for matches, category in CATEGORY_RULES:
        if matches(lowered):
            return category
    return OTHER


def group_by_category(items: Iterable[Any]) -> List[CategoryGroup]:
    """Partition items into category groups, Produce first and Other last.

    Items are sorted by display name within each group.
    """

    grouped: Dict[str, Tuple[FoodCategory, List[ConsolidatedItem]]] = {}
    for item in items:
        if not isinstance(item, ConsolidatedItem):
            continue
        grouped.setdefault(item.category.name, (item.category, []))[1].append(item)

    ordered: Sequence[Tuple[FoodCategory, List[ConsolidatedItem]]] = sorted(
        grouped.values(), key=lambda entry: entry[0].order
    )
    return [
        CategoryGroup(
            category=category,
            items=sorted(members, key=lambda member: member.name.lower()),
        )
        for category, members in ordered
    ]


__all__ = [
    "CATEGORIES",
    "CATEGORY_RULES",
    "KeywordRule",
    "OTHER",
    "PRODUCE",
    "categorize",
    "group_by_category",
]
