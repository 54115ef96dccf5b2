#!/usr/bin/env python
from sdk.catalog_client import CatalogAPIError, CatalogClient


def main():
    c = CatalogClient(base_url="http://127.0.0.1:8085", api_key="demo-key")

    # -----------------------------
    # Seeded catalog
    # -----------------------------
    print("Listing seeded products...")
    print(c.list_products())

    # -----------------------------
    # Create products
    # -----------------------------
    print("\nCreating products...")
    mouse = c.create_product("Wireless Mouse", "Ergonomic 2.4GHz mouse", 25, "Electronics")
    kettle = c.create_product("Kettle", "1.7L electric kettle", 40, "kitchen", in_stock=False)
    print(mouse)
    print(kettle)

    # -----------------------------
    # Duplicate names are rejected
    # -----------------------------
    print("\nCreating a duplicate...")
    try:
        c.create_product("wireless mouse", "Same name, other case", 30, "electronics")
    except CatalogAPIError as e:
        print(f"{e.status_code} {e.error}: {e.message}")

    # -----------------------------
    # Filter, sort, paginate
    # -----------------------------
    print("\nElectronics under 900, most expensive first...")
    print(c.list_products(category="electronics", maxPrice=900, sortBy="price", sortOrder="desc"))

    print("\nSecond page, one per page...")
    print(c.list_products(page=2, limit=1))

    # -----------------------------
    # Search and stats
    # -----------------------------
    print("\nSearching for 'mouse'...")
    print(c.search_products("mouse"))

    print("\nStatistics...")
    print(c.stats())

    # -----------------------------
    # Update and delete
    # -----------------------------
    print("\nRestocking the kettle...")
    print(c.update_product(kettle["id"], "Kettle", "1.7L electric kettle", 35, "kitchen", in_stock=True))

    print("\nDeleting the mouse...")
    print(c.delete_product(mouse["id"]))
    try:
        c.get_product(mouse["id"])
    except CatalogAPIError as e:
        print(f"{e.status_code} {e.error}: {e.message}")


if __name__ == "__main__":
    main()
