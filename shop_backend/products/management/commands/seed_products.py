from decimal import Decimal

from django.core.management.base import BaseCommand

from products.models import Product


class Command(BaseCommand):
    help = "Seed demo products with opening stock"

    def handle(self, *args, **options):
        self.stdout.write(self.style.WARNING("Seeding products..."))

        products_data = [
            ("Pixel 7A", "34999.00", 25),
            ("ThinkPad X1", "119999.00", 10),
            ("Noise Cancelling Headphones", "19999.00", 40),
            ("Mechanical Keyboard", "7999.00", 30),
            ("Casual Sneakers", "4999.00", 50),
        ]

        created_count = 0
        for title, price, stock in products_data:
            _, created = Product.objects.get_or_create(
                title=title,
                defaults={"price": Decimal(price), "quantity": stock},
            )
            if created:
                created_count += 1

        self.stdout.write(
            self.style.SUCCESS(f"Products seeded: {created_count} new, {len(products_data)} total")
        )
