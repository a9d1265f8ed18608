from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from modules.products.models import ProductRecord

pytestmark = pytest.mark.unit


class TestSeedProductsCommand:
    def test_creates_requested_number_of_products(self):
        out = StringIO()
        call_command("seed_products", "--count", "3", stdout=out)

        assert ProductRecord.objects.count() == 3
        assert "Seed completed: products=3" in out.getvalue()

    def test_names_cycle_through_catalog(self):
        call_command("seed_products", "--count", "25", stdout=StringIO())

        names = list(ProductRecord.objects.order_by("id").values_list("name", flat=True))
        assert len(names) == 25
        assert names[20] == names[0]

    def test_seed_makes_skus_reproducible(self):
        call_command("seed_products", "--count", "2", "--seed", "1", stdout=StringIO())
        first = list(ProductRecord.objects.order_by("id").values_list("sku", flat=True))
        ProductRecord.objects.all().delete()

        call_command("seed_products", "--count", "2", "--seed", "1", stdout=StringIO())
        second = list(ProductRecord.objects.order_by("id").values_list("sku", flat=True))

        assert first == second

    def test_negative_count_fails_without_creating(self):
        with pytest.raises(CommandError, match="--count"):
            call_command("seed_products", "--count", "-1", stdout=StringIO())

        assert not ProductRecord.objects.exists()
