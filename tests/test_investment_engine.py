"""
Tests for expected return, maturity scheduling and investment creation.
"""
import uuid
from datetime import datetime, timezone
from decimal import Decimal

import pytest
from pydantic import ValidationError

from app.core.errors import AboveMaximum, BelowMinimum, ProductNotFound
from app.v1_0.repositories import InvestmentRepository, ProductRepository
from app.v1_0.schemas import InvestmentCreate
from app.v1_0.services import InvestmentService
from app.v1_0.services.investment_service import add_months, expected_return

from .conftest import make_product, make_user

T0 = datetime(2024, 1, 31, 9, 30, tzinfo=timezone.utc)


class TestExpectedReturn:

    def test_reference_case(self) -> None:
        """50000 at 8.5% for 24 months -> 8500.00."""
        assert expected_return(Decimal("50000"), Decimal("8.5"), 24) == Decimal("8500.00")

    def test_rounds_half_up_to_cents(self) -> None:
        # 1000 * 7.25 * 1 / 1200 = 6.041666...
        assert expected_return(Decimal("1000"), Decimal("7.25"), 1) == Decimal("6.04")
        # 1500 * 1 * 1 / 1200 = 1.25
        assert expected_return(Decimal("1500"), Decimal("1"), 1) == Decimal("1.25")

    def test_zero_yield(self) -> None:
        assert expected_return(Decimal("5000"), Decimal("0"), 12) == Decimal("0.00")


class TestAddMonths:

    def test_clamps_to_leap_february(self) -> None:
        assert add_months(T0, 1) == datetime(2024, 2, 29, 9, 30, tzinfo=timezone.utc)

    def test_clamps_to_short_february(self) -> None:
        start = datetime(2023, 1, 31, tzinfo=timezone.utc)
        assert add_months(start, 1) == datetime(2023, 2, 28, tzinfo=timezone.utc)

    def test_crosses_year(self) -> None:
        start = datetime(2024, 11, 15, 12, 0, tzinfo=timezone.utc)
        assert add_months(start, 3) == datetime(2025, 2, 15, 12, 0, tzinfo=timezone.utc)

    def test_multi_year(self) -> None:
        start = datetime(2024, 2, 29, tzinfo=timezone.utc)
        assert add_months(start, 24) == datetime(2026, 2, 28, tzinfo=timezone.utc)
        assert add_months(start, 48) == datetime(2028, 2, 29, tzinfo=timezone.utc)


class TestInvestmentCreateSchema:

    def test_floor(self) -> None:
        with pytest.raises(ValidationError):
            InvestmentCreate(product_id=uuid.uuid4(), amount=Decimal("999.99"))

    def test_floor_boundary(self) -> None:
        body = InvestmentCreate(product_id=uuid.uuid4(), amount=Decimal("1000"))
        assert body.amount == Decimal("1000")

    def test_non_positive(self) -> None:
        with pytest.raises(ValidationError):
            InvestmentCreate(product_id=uuid.uuid4(), amount=Decimal("-5"))


class TestInvestmentService:
    """InvestmentService.create against an in-memory database."""

    @pytest.fixture
    def service(self) -> InvestmentService:
        return InvestmentService(InvestmentRepository(), ProductRepository(), clock=lambda: T0)

    async def test_creates_active_investment(self, db, service) -> None:
        user = await make_user(db)
        product = await make_product(db, tenure_months=24, annual_yield=Decimal("8.50"))

        out = await service.create(
            db,
            user_id=user.id,
            payload=InvestmentCreate(product_id=product.id, amount=Decimal("50000")),
        )

        inv = out.investment
        assert out.message == "Investment created successfully"
        assert inv.status == "active"
        assert inv.expected_return == Decimal("8500.00")
        assert inv.maturity_date == datetime(2026, 1, 31, 9, 30, tzinfo=timezone.utc)
        assert inv.invested_at == T0
        assert inv.product.id == product.id

    async def test_amount_equal_to_minimum_is_accepted(self, db, service) -> None:
        user = await make_user(db)
        product = await make_product(db, min_investment=Decimal("5000.00"))
        out = await service.create(
            db, user_id=user.id, payload=InvestmentCreate(product_id=product.id, amount=Decimal("5000"))
        )
        assert out.investment.amount == Decimal("5000")

    async def test_below_product_minimum(self, db, service) -> None:
        user = await make_user(db)
        product = await make_product(db, min_investment=Decimal("5000.00"))
        with pytest.raises(BelowMinimum) as exc:
            await service.create(
                db, user_id=user.id, payload=InvestmentCreate(product_id=product.id, amount=Decimal("4999.99"))
            )
        assert exc.value.status_code == 400
        assert "Minimum investment amount is ₹5000" in exc.value.detail

    async def test_above_product_maximum(self, db, service) -> None:
        user = await make_user(db)
        product = await make_product(db, max_investment=Decimal("10000.00"))
        with pytest.raises(AboveMaximum):
            await service.create(
                db, user_id=user.id, payload=InvestmentCreate(product_id=product.id, amount=Decimal("10000.01"))
            )

    async def test_no_maximum_means_unbounded(self, db, service) -> None:
        user = await make_user(db)
        product = await make_product(db, max_investment=None)
        out = await service.create(
            db, user_id=user.id, payload=InvestmentCreate(product_id=product.id, amount=Decimal("9999999.00"))
        )
        assert out.investment.amount == Decimal("9999999.00")

    async def test_unknown_product(self, db, service) -> None:
        user = await make_user(db)
        with pytest.raises(ProductNotFound):
            await service.create(
                db, user_id=user.id, payload=InvestmentCreate(product_id=uuid.uuid4(), amount=Decimal("5000"))
            )

    async def test_rejected_request_writes_nothing(self, db, service) -> None:
        user = await make_user(db)
        user_id = user.id
        product = await make_product(db, min_investment=Decimal("5000.00"))
        with pytest.raises(BelowMinimum):
            await service.create(
                db, user_id=user_id, payload=InvestmentCreate(product_id=product.id, amount=Decimal("1000"))
            )
        rows = await InvestmentRepository().list_by_user_with_product(user_id, db)
        assert rows == []
