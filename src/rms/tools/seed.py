from __future__ import annotations

from datetime import datetime, timezone

from rms.domain.menu.entities import create_menu_item
from rms.infrastructure.db.client import MENU_COLLECTION, create_client, ensure_indexes, get_database
from rms.infrastructure.db.documents import menu_item_to_document

SAMPLE_ITEMS = [
    {
        "name": "Paneer Tikka",
        "category": "Starters",
        "price": 249.0,
        "ingredients": ["Paneer", "Yogurt", "Bell pepper", "Spices"],
        "tags": ["vegetarian", "grill"],
        "availability": True,
    },
    {
        "name": "Butter Chicken",
        "category": "Mains",
        "price": 379.0,
        "ingredients": ["Chicken", "Tomato", "Butter", "Cream"],
        "tags": ["signature"],
        "availability": True,
    },
    {
        "name": "Dal Makhani",
        "category": "Mains",
        "price": 289.0,
        "ingredients": ["Black lentils", "Kidney beans", "Butter"],
        "tags": ["vegetarian"],
        "availability": True,
    },
    {
        "name": "Gulab Jamun",
        "category": "Desserts",
        "price": 129.0,
        "ingredients": ["Milk solids", "Sugar syrup", "Cardamom"],
        "tags": ["vegetarian", "sweet"],
        "availability": False,
    },
]


def main() -> None:
    client = create_client()
    try:
        database = get_database(client)
        ensure_indexes(database)
        collection = database[MENU_COLLECTION]
        now = datetime.now(timezone.utc)

        for values in SAMPLE_ITEMS:
            document = menu_item_to_document(create_menu_item(now=now, **values))
            created_at = document.pop("createdAt")
            collection.update_one(
                {"name": document["name"]},
                {"$set": document, "$setOnInsert": {"createdAt": created_at}},
                upsert=True,
            )
    finally:
        client.close()

    print("seed complete")


if __name__ == "__main__":
    main()
