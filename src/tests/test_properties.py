"""Проверки свойств калькулятора на случайных корзинах."""

import random
from decimal import Decimal

import pytest

from conftest import make_item
from pricing.services.calculator import calculate
from pricing.services.rules_store import build_rules

SEEDS = list(range(25))
# Поэтапное округление до цента на границе тарифа доставки
ROUNDING_SLACK = 1


def random_cart(rng: random.Random, max_lines: int = 6):
    """Случайная корзина с ценами до $150 и количеством до 40 шт. на позицию."""
    return [
        make_item(rng.randint(0, 15000), rng.randint(1, 40), f"SKU{i}")
        for i in range(rng.randint(0, max_lines))
    ]


@pytest.fixture
def flat_shipping_rules():
    """Правила с единым тарифом доставки."""
    return build_rules(
        {
            "name": "flat",
            "tierDiscounts": [
                {"threshold": 10, "rate": Decimal("0.05")},
                {"threshold": 20, "rate": Decimal("0.10")},
                {"threshold": 50, "rate": Decimal("0.15")},
            ],
            "subscriptionDiscountRate": Decimal("0.10"),
            "shippingTiers": [{"threshold": 0, "cost": 1500}],
        }
    )


class TestCalculatorProperties:
    """Свойства, которые должны выполняться для любой корректной корзины."""

    @pytest.mark.parametrize("seed", SEEDS)
    def test_deterministic(self, standard_rules, seed):
        """Одинаковый вход дает одинаковый результат."""
        rng = random.Random(seed)
        cart = random_cart(rng)
        is_subscriber = rng.choice([True, False])

        first = calculate(cart, standard_rules, is_subscriber)
        second = calculate(list(cart), standard_rules, is_subscriber)

        assert first == second

    @pytest.mark.parametrize("seed", SEEDS)
    def test_amounts_add_up(self, standard_rules, seed):
        """Скидки и итог складываются в исходные суммы без потерь."""
        rng = random.Random(seed)
        cart = random_cart(rng)
        breakdown = calculate(cart, standard_rules, rng.choice([True, False]))

        assert breakdown.base_total == sum(i.unit_price * i.quantity for i in cart)
        assert breakdown.total_quantity == sum(i.quantity for i in cart)
        assert (
            breakdown.base_total
            - breakdown.tier_discount_amount
            - breakdown.subscription_discount_amount
            == breakdown.subtotal_after_discounts
        )
        assert (
            breakdown.subtotal_after_discounts + breakdown.shipping_cost
            == breakdown.grand_total
        )

    @pytest.mark.parametrize("seed", SEEDS)
    def test_amounts_non_negative(self, standard_rules, seed):
        """Все суммы неотрицательны."""
        rng = random.Random(seed)
        breakdown = calculate(random_cart(rng), standard_rules, True)

        assert breakdown.tier_discount_amount >= 0
        assert breakdown.subscription_discount_amount >= 0
        assert breakdown.subtotal_after_discounts >= 0
        assert breakdown.shipping_cost >= 0
        assert breakdown.grand_total >= breakdown.subtotal_after_discounts

    @pytest.mark.parametrize("seed", SEEDS)
    def test_single_tier_applied(self, standard_rules, seed):
        """Применяется ровно одна ставка из настроенных порогов."""
        rng = random.Random(seed)
        breakdown = calculate(random_cart(rng), standard_rules)

        configured = {Decimal("0")} | {t.rate for t in standard_rules.tier_discounts}
        assert breakdown.tier_discount_rate in configured

    @pytest.mark.parametrize("seed", SEEDS)
    def test_subscriber_never_pays_more(self, standard_rules, seed):
        """Подписчик платит не больше обычного покупателя (до доставки)."""
        rng = random.Random(seed)
        cart = random_cart(rng)

        regular = calculate(cart, standard_rules, is_subscriber=False)
        subscriber = calculate(cart, standard_rules, is_subscriber=True)

        assert subscriber.subtotal_after_discounts <= regular.subtotal_after_discounts

    @pytest.mark.parametrize("unit_price", [1, 99, 4500, 12345])
    def test_tier_rate_monotonic_in_quantity(self, standard_rules, unit_price):
        """Ставка количественной скидки не убывает с ростом количества."""
        rates = [
            calculate([make_item(unit_price, quantity)], standard_rules).tier_discount_rate
            for quantity in range(1, 80)
        ]

        assert rates == sorted(rates)

    @pytest.mark.parametrize("seed", SEEDS)
    def test_more_items_never_cost_more_per_unit(self, flat_shipping_rules, seed):
        """При одинаковой цене итог за штуку не растет с количеством."""
        rng = random.Random(seed)
        unit_price = rng.randint(100, 15000)
        quantities = sorted(rng.sample(range(1, 120), 10))

        per_unit = [
            calculate(
                [make_item(unit_price, q)], flat_shipping_rules
            ).subtotal_after_discounts / q
            for q in quantities
        ]

        for prev, curr in zip(per_unit, per_unit[1:]):
            assert curr <= prev + 1

    @pytest.mark.parametrize("seed", SEEDS)
    def test_adding_item_never_lowers_total_with_flat_shipping(
        self, flat_shipping_rules, seed
    ):
        """С единым тарифом доставки добавление товара в пределах порога не уменьшает итог."""
        rng = random.Random(seed)
        unit_price = rng.randint(0, 15000)
        # в пределах одного порога скидки ставка одинакова
        quantity = rng.choice([1, 10, 20, 50])
        upper = {1: 9, 10: 19, 20: 49, 50: 200}[quantity]

        totals = [
            calculate([make_item(unit_price, q)], flat_shipping_rules).grand_total
            for q in range(quantity, upper + 1)
        ]

        assert totals == sorted(totals)

    @pytest.mark.parametrize("is_subscriber", [False, True])
    @pytest.mark.parametrize("seed", SEEDS)
    def test_raising_quantity_keeps_discount_and_total_bounded(
        self, standard_rules, seed, is_subscriber
    ):
        """Рост количества одной позиции не уменьшает скидку и поднимает итог не больше цены штуки."""
        rng = random.Random(seed)
        cart = random_cart(rng) or [make_item(rng.randint(0, 15000), 1, "SKU0")]
        index = rng.randrange(len(cart))
        line = cart[index]
        previous = calculate(cart, standard_rules, is_subscriber)

        for quantity in range(line.quantity + 1, line.quantity + 61):
            cart[index] = make_item(line.unit_price, quantity, line.product_id)
            current = calculate(cart, standard_rules, is_subscriber)

            assert current.tier_discount_amount >= previous.tier_discount_amount
            assert current.grand_total - previous.grand_total <= line.unit_price + ROUNDING_SLACK
            previous = current

    @pytest.mark.parametrize("is_subscriber", [False, True])
    def test_total_bounded_across_shipping_threshold(self, standard_rules, is_subscriber):
        """Скидка за 10 шт. уводит сумму под порог доставки: итог растет не больше чем на цент."""
        for price in range(21000, 23500):
            before = calculate(
                [make_item(price, 1, "A"), make_item(0, 8, "B")], standard_rules, is_subscriber
            )
            after = calculate(
                [make_item(price, 1, "A"), make_item(0, 9, "B")], standard_rules, is_subscriber
            )

            assert after.tier_discount_amount >= before.tier_discount_amount
            assert after.grand_total - before.grand_total <= ROUNDING_SLACK
