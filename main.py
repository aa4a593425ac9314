"""Simple entrypoint that prints the gap analysis for a sample wardrobe."""

from advisor_app.app import GapAdvisorApp
from tools.wardrobe_source import InMemoryWardrobeSource

DEMO_USER = "demo_user"

DEMO_ITEMS = [
    {"item_id": "blouse", "category": "top", "subcategory": "blouse", "color": "white"},
    {"item_id": "tee", "category": "top", "subcategory": "t-shirt", "color": "black"},
    {"item_id": "trousers", "category": "bottom", "subcategory": "trousers", "color": "navy"},
    {"item_id": "jeans", "category": "bottom", "subcategory": "jeans", "color": "blue"},
    {"item_id": "sneakers", "category": "footwear", "subcategory": "sneakers", "color": "white"},
    {"item_id": "trench", "category": "outerwear", "subcategory": "trench coat", "season": ["spring", "fall"]},
]

DEMO_SCENARIOS = [
    {"name": "Office Work", "frequency": "daily"},
    {"name": "Weekend Casual", "frequency": "weekly"},
]


def main() -> None:
    source = InMemoryWardrobeSource(items={DEMO_USER: DEMO_ITEMS}, scenarios={DEMO_USER: DEMO_SCENARIOS})
    app = GapAdvisorApp(source=source)
    advice = app.advise(
        DEMO_USER,
        {"category": "footwear", "subcategory": "heels", "color": "black", "seasons": ["spring", "summer"]},
    )
    print(advice.prompt_text)
    print(f"\nMandatory score: {advice.decision.score} ({advice.decision.reason})")


if __name__ == "__main__":
    main()
