from __future__ import annotations

import random
from itertools import cycle, islice

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.services import ProductService

CATALOG = [
    'Monitor 27"',
    "Mechanical Keyboard",
    "Gaming Mouse",
    'Notebook 14"',
    "Headset",
    "Office Desk",
    "Ergonomic Chair",
    "Bookshelf",
    "Cabinet",
    "Two-seat Sofa",
    "A4 Paper",
    "Blue Pen",
    "Notebook Paper",
    "Stapler",
    "Sticky Notes",
    "Planner",
    "Highlighter",
    "Calculator",
    "LED Lamp",
    "Laptop Stand",
]


class Command(BaseCommand):
    help = "Seed the products table with demo data through the product service."

    def add_arguments(self, parser):
        parser.add_argument(
            "--count",
            type=int,
            default=len(CATALOG),
            help="Number of products to create (names cycle through the catalog).",
        )
        parser.add_argument(
            "--seed",
            type=int,
            default=None,
            help="Seed for SKU suffix generation (reproducible runs on an empty table).",
        )
        parser.add_argument(
            "--database",
            default=settings.PRODUCTS_DB_ALIAS,
            help="Database alias to seed.",
        )

    def handle(self, *args, **options):
        count = options["count"]
        if count < 0:
            raise CommandError("--count must not be negative.")

        service = ProductService(
            repository=ProductDjangoRepository(using=options["database"]),
            random_source=(
                random.Random(options["seed"]) if options["seed"] is not None else None
            ),
        )

        self.stdout.write("Creating products...")
        created = [
            service.create_product(name) for name in islice(cycle(CATALOG), count)
        ]
        for product in created:
            self.stdout.write(f"  {product.id}: {product.sku} {product.name}")

        self.stdout.write(
            self.style.SUCCESS(f"Seed completed: products={len(created)}")
        )
