"""Unit tests for order identifier generation."""

import random
import re
from datetime import datetime, timedelta, timezone

from storefront.domain.service.order_ids import OrderIdGenerator, generate_order_id

ORDER_ID_RE = re.compile(r"^ORD-\d{8}-\d{5}$")


class TestGenerateOrderId:

    def test_format_and_date(self):
        now = datetime(2024, 3, 15, 23, 59, tzinfo=timezone.utc)
        order_id = generate_order_id(now, random.Random(1))
        assert ORDER_ID_RE.match(order_id)
        assert order_id.startswith("ORD-20240315-")

    def test_date_is_utc(self):
        # 01:30 on the 16th in UTC+5 is still the 15th in UTC
        tz = timezone(timedelta(hours=5))
        now = datetime(2024, 3, 16, 1, 30, tzinfo=tz)
        assert generate_order_id(now, random.Random(1)).startswith("ORD-20240315-")

    def test_deterministic_for_same_seed(self):
        now = datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert generate_order_id(now, random.Random(42)) == generate_order_id(
            now, random.Random(42)
        )

    def test_numeric_part_in_range(self):
        rng = random.Random(7)
        now = datetime(2024, 1, 1, tzinfo=timezone.utc)
        for _ in range(500):
            number = int(generate_order_id(now, rng).rsplit("-", 1)[1])
            assert 10000 <= number <= 99999


class TestOrderIdGenerator:

    def test_uses_injected_clock(self):
        gen = OrderIdGenerator(
            clock=lambda: datetime(2030, 12, 31, tzinfo=timezone.utc),
            rng=random.Random(3),
        )
        assert gen().startswith("ORD-20301231-")

    def test_default_generator_produces_valid_ids(self):
        assert ORDER_ID_RE.match(OrderIdGenerator()())
