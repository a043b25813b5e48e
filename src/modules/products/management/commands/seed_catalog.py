from __future__ import annotations

from decimal import Decimal

from django.core.management.base import BaseCommand

from modules.products.dtos import CreateProductDTO, CreateVariationDTO
from modules.products.models import Product
from modules.products.repositories.django_repository import (
    ProductDjangoRepository,
    VariationDjangoRepository,
)
from modules.products.services import CatalogService

SEED_PRODUCTS = [
    {
        "name": "Classic Tee",
        "description": "Cotton crew-neck t-shirt.",
        "category": "shirt",
        "available": True,
        "variations": [
            ("S", "Small", "19.90", True),
            ("M", "Medium", "19.90", True),
            ("L", "Large", "21.90", False),
        ],
    },
    {
        "name": "Slim Chino",
        "description": "Stretch chino trousers.",
        "category": "pants",
        "available": True,
        "variations": [
            ("38", "Waist 38", "89.90", True),
            ("40", "Waist 40", "89.90", True),
        ],
    },
    {
        "name": "Trail Runner",
        "description": "Lightweight trail running shoe.",
        "category": "shoes",
        "available": False,
        "variations": [
            ("41", "EU 41", "349.00", False),
            ("42", "EU 42", "349.00", False),
        ],
    },
]


class Command(BaseCommand):
    help = "Seed database with development catalog data."

    def handle(self, *args, **options):
        self.stdout.write("Seeding catalog...")
        service = CatalogService(
            product_repository=ProductDjangoRepository(),
            variation_repository=VariationDjangoRepository(),
        )

        created = 0
        for spec in SEED_PRODUCTS:
            if Product.objects.filter(name=spec["name"]).exists():
                continue
            service.create_product(
                CreateProductDTO(
                    name=spec["name"],
                    description=spec["description"],
                    category=spec["category"],
                    available=spec["available"],
                    variations=[
                        CreateVariationDTO(
                            size_name=size_name,
                            description=description,
                            price=Decimal(price),
                            available=available,
                        )
                        for size_name, description, price, available in spec["variations"]
                    ],
                )
            )
            created += 1

        self.stdout.write(
            self.style.SUCCESS(
                f"Seed completed: products={created}, "
                f"skipped={len(SEED_PRODUCTS) - created}"
            )
        )
