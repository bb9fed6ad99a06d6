"""
Populate the database with demo data.

Wipes all existing rows, then creates one verified owner with two
restaurants, their categories and dishes.

Usage:
    python -m database.seed
"""
import asyncio
import logging

from dotenv import load_dotenv
from sqlalchemy import delete

from service.config import get_database_url
from .engine import create_engine, create_session_factory, init_models
from .models import User, Restaurant, Category, Dish, DishCategory

logger = logging.getLogger('menu.database.seed')

SEED_OWNER_EMAIL = "owner@example.com"

# restaurant -> (location, categories, dishes); each dish lists its category names
SEED_DATA = {
    "The Italian Bistro": (
        "New York, NY, USA",
        ["Appetizers", "Main Courses", "Desserts", "Beverages"],
        [
            ("Bruschetta", "Toasted bread topped with tomatoes, garlic and fresh basil", "$8.99", 0, ["Appetizers"]),
            ("Calamari Fritti", "Crispy fried squid with marinara sauce", "$12.99", 1, ["Appetizers"]),
            ("Spaghetti Carbonara", "Pasta with eggs, pecorino, guanciale and black pepper", "$18.99", 0, ["Main Courses"]),
            ("Penne Arrabbiata", "Penne in a spicy tomato and chili sauce", "$16.99", 2, ["Main Courses"]),
            ("Tiramisu", "Espresso-soaked ladyfingers layered with mascarpone", "$9.99", 0, ["Desserts"]),
            ("Affogato", "Vanilla gelato drowned in a shot of espresso", "$6.99", 0, ["Desserts", "Beverages"]),
        ],
    ),
    "Spice Garden": (
        "Mumbai, Maharashtra, India",
        ["Starters", "Curries", "Breads", "Drinks"],
        [
            ("Samosa", "Crisp pastry filled with spiced potatoes and peas", "₹120", 1, ["Starters"]),
            ("Chicken Tikka", "Chargrilled chicken marinated in yogurt and spices", "₹320", 2, ["Starters"]),
            ("Butter Chicken", "Tandoori chicken in a creamy tomato gravy", "₹420", 1, ["Curries"]),
            ("Lamb Vindaloo", "Fiery Goan curry with vinegar and chilies", "₹480", 3, ["Curries"]),
            ("Garlic Naan", "Leavened flatbread with garlic and butter", "₹90", 0, ["Breads"]),
            ("Mango Lassi", "Chilled yogurt drink with ripe mango", "₹150", 0, ["Drinks"]),
        ],
    ),
}


async def seed(database_url: str) -> None:
    engine = create_engine(database_url)
    await init_models(engine)
    factory = create_session_factory(engine)

    async with factory() as db:
        logger.info("Clearing existing data")
        # Children first so the wipe also works without foreign key cascades
        for model in (DishCategory, Dish, Category, Restaurant, User):
            await db.execute(delete(model))

        owner = User(email=SEED_OWNER_EMAIL, name="Demo Owner", country="United States", verified=True)
        db.add(owner)

        for restaurant_name, (location, category_names, dishes) in SEED_DATA.items():
            restaurant = Restaurant(name=restaurant_name, location=location, owner=owner)
            categories = {name: Category(name=name, restaurant=restaurant) for name in category_names}
            db.add(restaurant)
            db.add_all(categories.values())

            for name, description, price, spice_level, dish_categories in dishes:
                dish = Dish(
                    name=name,
                    description=description,
                    price=price,
                    spice_level=spice_level,
                    restaurant=restaurant,
                )
                dish.category_links = [DishCategory(category=categories[c]) for c in dish_categories]
                db.add(dish)

            logger.info(f"Seeded {restaurant_name} with {len(category_names)} categories and {len(dishes)} dishes")

        await db.commit()

    await engine.dispose()
    logger.info(f"Seeding complete; log in as {SEED_OWNER_EMAIL}")


if __name__ == "__main__":
    load_dotenv()
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    asyncio.run(seed(get_database_url()))
