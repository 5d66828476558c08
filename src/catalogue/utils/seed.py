"""Sample catalogue data for local development and demos.

Records are built through the aggregates' own factories and state
transitions. Denormalized counts are then derived the same way production
does it, by calling the canonical recompute functions for every product and
category.
"""

from protean.utils.globals import current_domain

from catalogue.category.category import Category
from catalogue.category.product_count import recompute_category_product_count
from catalogue.product.product import Product
from catalogue.review.rating import recompute_product_rating
from catalogue.review.review import Review
from catalogue.utils.logging import get_logger

logger = get_logger(__name__)

CATEGORIES = [
    {
        "name": "Robot Cleaners",
        "description": "Advanced robotic vacuum and floor cleaning solutions",
        "icon": "🧹",
        "display_order": 1,
    },
    {
        "name": "Kitchen Robots",
        "description": "Automated cooking and food preparation assistants",
        "icon": "👨‍🍳",
        "display_order": 2,
    },
    {
        "name": "Lawn Care",
        "description": "Smart lawn mowing and garden maintenance robots",
        "icon": "🌱",
        "display_order": 3,
    },
    {
        "name": "Security Robots",
        "description": "Autonomous security and surveillance systems",
        "icon": "🔒",
        "display_order": 4,
    },
    {
        "name": "Service Robots",
        "description": "Food service and hospitality automation",
        "icon": "🍽️",
        "display_order": 5,
    },
    {
        "name": "Companion Robots",
        "description": "Social and entertainment robotic companions",
        "icon": "🤖",
        "display_order": 6,
    },
]

# Keyed by category slug
PRODUCTS = [
    {
        "name": "RoboClean Pro X1",
        "description": (
            "Flagship robotic vacuum with AI navigation, 3000Pa suction and "
            "multi-floor mapping. Ideal for homes with pets."
        ),
        "price": 599.99,
        "discount_price": 499.99,
        "category": "robot-cleaners",
        "stock": 45,
        "featured": True,
        "tags": ["vacuum", "smart home", "pet-friendly", "bestseller"],
    },
    {
        "name": "ChefBot Deluxe",
        "description": "Automated cooking assistant with 500+ pre-programmed recipes, from chopping to plating.",
        "price": 1299.99,
        "category": "kitchen-robots",
        "stock": 23,
        "featured": True,
        "tags": ["cooking", "kitchen", "automation", "new-arrival"],
    },
    {
        "name": "LawnMaster AI",
        "description": "Robotic lawn mower with weather adaptation and GPS boundary mapping.",
        "price": 799.99,
        "discount_price": 699.99,
        "category": "lawn-care",
        "stock": 34,
        "featured": True,
        "tags": ["lawn", "outdoor", "gardening"],
    },
    {
        "name": "ServeBot Elite",
        "description": "Food and beverage serving robot for restaurants, with tray stabilization.",
        "price": 899.99,
        "category": "service-robots",
        "stock": 15,
        "featured": True,
        "tags": ["restaurant", "service", "hospitality"],
    },
    {
        "name": "GuardBot Pro",
        "description": "Security robot with 360° cameras, thermal imaging and AI threat detection.",
        "price": 1499.99,
        "category": "security-robots",
        "stock": 12,
        "tags": ["security", "surveillance", "ai"],
    },
    {
        "name": "CompanionBot Joy",
        "description": "Social robot for companionship with emotional AI, games and video calling.",
        "price": 399.99,
        "category": "companion-robots",
        "stock": 56,
        "tags": ["companion", "entertainment", "family"],
    },
    {
        "name": "RoboClean Mini",
        "description": "Compact robotic vacuum for apartments and small spaces.",
        "price": 299.99,
        "category": "robot-cleaners",
        "stock": 67,
        "tags": ["vacuum", "compact", "apartment"],
    },
    {
        "name": "PoolBot Aqua",
        "description": "Pool cleaning robot with advanced filtration and wall climbing.",
        "price": 699.99,
        "category": "lawn-care",
        "stock": 28,
        "tags": ["pool", "cleaning", "outdoor"],
    },
]

# Keyed by product name
REVIEWS = [
    {
        "product": "RoboClean Pro X1",
        "reviewer_name": "Sarah Johnson",
        "reviewer_email": "sarah.j@email.com",
        "rating": 5,
        "comment": "Handles pet hair like a champ and the mapping is accurate.",
        "helpful_count": 45,
        "status": "approved",
    },
    {
        "product": "RoboClean Pro X1",
        "reviewer_name": "Mike Chen",
        "reviewer_email": "mike.c@email.com",
        "rating": 4,
        "comment": "Powerful suction. Rarely gets stuck on thick carpets.",
        "helpful_count": 23,
        "status": "approved",
    },
    {
        "product": "RoboClean Pro X1",
        "reviewer_name": "Nina Patel",
        "reviewer_email": "nina.p@email.com",
        "rating": 2,
        "comment": "Mine stopped charging after two weeks.",
        "helpful_count": 0,
        "status": "pending",
    },
    {
        "product": "ChefBot Deluxe",
        "reviewer_name": "Emily Rodriguez",
        "reviewer_email": "emily.r@email.com",
        "rating": 5,
        "comment": "Transformed our dinner routine. My kids love watching it cook!",
        "helpful_count": 67,
        "status": "approved",
    },
    {
        "product": "ChefBot Deluxe",
        "reviewer_name": "David Park",
        "reviewer_email": "david.p@email.com",
        "rating": 5,
        "comment": "Restaurant-quality meals from a robot. Impressive!",
        "helpful_count": 34,
        "status": "approved",
    },
    {
        "product": "LawnMaster AI",
        "reviewer_name": "Jennifer Smith",
        "reviewer_email": "jen.smith@email.com",
        "rating": 5,
        "comment": "The weather sensor knows when to skip rainy days.",
        "helpful_count": 28,
        "status": "approved",
    },
    {
        "product": "LawnMaster AI",
        "reviewer_name": "Robert Taylor",
        "reviewer_email": "rob.t@email.com",
        "rating": 4,
        "comment": "Great on flat lawns; slopes needed a settings tweak.",
        "helpful_count": 15,
        "status": "approved",
    },
    {
        "product": "ServeBot Elite",
        "reviewer_name": "Lisa Anderson",
        "reviewer_email": "lisa.a@email.com",
        "rating": 5,
        "comment": "A fantastic addition to our restaurant during busy hours.",
        "helpful_count": 52,
        "status": "approved",
    },
    {
        "product": "GuardBot Pro",
        "reviewer_name": "James Wilson",
        "reviewer_email": "james.w@email.com",
        "rating": 5,
        "comment": "Accurate detection and instant alerts on my phone.",
        "helpful_count": 41,
        "status": "approved",
    },
    {
        "product": "GuardBot Pro",
        "reviewer_name": "Spam Bot",
        "reviewer_email": "promo@spam-deals.com",
        "rating": 1,
        "comment": "Buy cheap watches at our site!!!",
        "helpful_count": 0,
        "status": "rejected",
    },
    {
        "product": "CompanionBot Joy",
        "reviewer_name": "Maria Garcia",
        "reviewer_email": "maria.g@email.com",
        "rating": 4,
        "comment": "My mother loves the video calling feature.",
        "helpful_count": 19,
        "status": "approved",
    },
    {
        "product": "RoboClean Mini",
        "reviewer_name": "Tom Brown",
        "reviewer_email": "tom.b@email.com",
        "rating": 4,
        "comment": "Quiet and effective in a small apartment.",
        "helpful_count": 12,
        "status": "approved",
    },
]


def seed_catalogue():
    """Load sample categories, products and reviews into the current domain.

    Returns a summary of record counts.
    """
    category_repo = current_domain.repository_for(Category)
    product_repo = current_domain.repository_for(Product)
    review_repo = current_domain.repository_for(Review)

    categories = {}
    for data in CATEGORIES:
        category = Category.create(**data)
        category_repo.add(category)
        categories[category.slug] = category

    products = {}
    for data in PRODUCTS:
        data = dict(data)
        category = categories[data.pop("category")]
        product = Product.create(category_id=category.id, **data)
        product_repo.add(product)
        products[product.name] = product

    reviews = 0
    for data in REVIEWS:
        review = Review.submit(
            product_id=products[data["product"]].id,
            reviewer_name=data["reviewer_name"],
            reviewer_email=data["reviewer_email"],
            rating=data["rating"],
            comment=data["comment"],
            verified=data["status"] == "approved",
        )
        if data["status"] != "pending":
            review.moderate(data["status"])
        review.helpful_count = data["helpful_count"]
        review_repo.add(review)
        reviews += 1

    for product in products.values():
        recompute_product_rating(product.id)
    for category in categories.values():
        recompute_category_product_count(category.id)

    logger.info("Catalogue seeded", categories=len(categories), products=len(products), reviews=reviews)
    return {"categories": len(categories), "products": len(products), "reviews": reviews}


def recompute_all_ratings():
    """Backfill ``rating``/``num_reviews`` on every product. Returns the number of products."""
    dao = current_domain.repository_for(Product)._dao
    count = 0
    offset = 0
    batch_size = 100

    while True:
        page = dao.query.order_by("id").offset(offset).limit(batch_size).all()
        for product in page.items:
            recompute_product_rating(product.id)
            count += 1
        offset += batch_size
        if not page.items or offset >= page.total:
            break

    logger.info("Product ratings recomputed", products=count)
    return count
