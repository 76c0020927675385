from routers import admin, auth, carts, categories, orders, products, ratings, testimonials

__all__ = ["admin", "auth", "carts", "categories", "orders", "products", "ratings", "testimonials"]
