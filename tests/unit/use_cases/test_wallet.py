"""Unit tests for wallet ledger use cases

Tests cover:
- GetWallet
- CreditWallet / DebitWallet (amount > 0, missing distributor, insufficient funds)
- RecordPayment (debit and payment row in one transaction)
"""

from datetime import datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock
import pytest

from src.app.use_cases.wallet import (
    CreditWallet,
    DebitWallet,
    GetWallet,
    ListPayments,
    RecordPayment,
)
from src.app.use_cases.wallet.dtos import RecordPaymentCommandDTO, WalletAdjustmentCommandDTO
from src.domain.actor import ActorKind
from src.domain.payment import Payment, PaymentMethod


@pytest.fixture
def mock_distributor_repo(distributor):
    repo = MagicMock()
    repo.get_by_id = AsyncMock(return_value=distributor)
    repo.increment_balance = AsyncMock(return_value=Decimal("1100.00"))
    repo.decrement_balance_if_sufficient = AsyncMock(return_value=Decimal("900.00"))
    return repo


@pytest.fixture
def mock_payment_repo():
    repo = MagicMock()

    async def create(payment):
        payment.id = 77
        return payment

    repo.create = AsyncMock(side_effect=create)
    return repo


def adjustment(amount):
    return WalletAdjustmentCommandDTO(distributor_id=5, amount=Decimal(amount))


@pytest.mark.asyncio
class TestGetWallet:

    async def test_returns_balance(self, mock_distributor_repo):
        result = await GetWallet(mock_distributor_repo).execute(5)

        assert result.is_ok()
        assert result.value.wallet_balance == Decimal("1000.00")
        assert result.value.distributor_name == "Ravi Kumar"

    async def test_missing_distributor(self, mock_distributor_repo):
        mock_distributor_repo.get_by_id = AsyncMock(return_value=None)

        result = await GetWallet(mock_distributor_repo).execute(9)

        assert result.error.code == "DISTRIBUTOR_NOT_FOUND"


@pytest.mark.asyncio
class TestCreditWallet:

    async def test_credit(self, mock_uow, mock_distributor_repo):
        result = await CreditWallet(mock_uow, mock_distributor_repo).execute(adjustment("100"))

        assert result.is_ok()
        assert result.value.wallet_balance == Decimal("1100.00")
        mock_distributor_repo.increment_balance.assert_called_once_with(5, Decimal("100.00"))
        mock_uow.commit.assert_called_once()

    @pytest.mark.parametrize("amount", ["0", "-5"])
    async def test_non_positive_amount(self, mock_uow, mock_distributor_repo, amount):
        result = await CreditWallet(mock_uow, mock_distributor_repo).execute(adjustment(amount))

        assert result.error.code == "VALIDATION_ERROR"
        mock_distributor_repo.increment_balance.assert_not_called()

    async def test_missing_distributor(self, mock_uow, mock_distributor_repo):
        mock_distributor_repo.increment_balance = AsyncMock(return_value=None)

        result = await CreditWallet(mock_uow, mock_distributor_repo).execute(adjustment("100"))

        assert result.error.code == "DISTRIBUTOR_NOT_FOUND"
        mock_uow.rollback.assert_called_once()


@pytest.mark.asyncio
class TestDebitWallet:

    async def test_debit(self, mock_uow, mock_distributor_repo):
        result = await DebitWallet(mock_uow, mock_distributor_repo).execute(adjustment("100"))

        assert result.is_ok()
        assert result.value.wallet_balance == Decimal("900.00")
        mock_uow.commit.assert_called_once()

    async def test_insufficient_funds(self, mock_uow, mock_distributor_repo):
        mock_distributor_repo.decrement_balance_if_sufficient = AsyncMock(return_value=None)

        result = await DebitWallet(mock_uow, mock_distributor_repo).execute(adjustment("5000"))

        assert result.error.code == "INSUFFICIENT_FUNDS"
        mock_uow.rollback.assert_called_once()
        mock_uow.commit.assert_not_called()

    async def test_missing_distributor_is_not_insufficient_funds(self, mock_uow, mock_distributor_repo):
        mock_distributor_repo.get_by_id = AsyncMock(return_value=None)

        result = await DebitWallet(mock_uow, mock_distributor_repo).execute(adjustment("10"))

        assert result.error.code == "DISTRIBUTOR_NOT_FOUND"
        mock_distributor_repo.decrement_balance_if_sufficient.assert_not_called()


@pytest.mark.asyncio
class TestRecordPayment:

    @pytest.fixture
    def command(self, staff_actor):
        return RecordPaymentCommandDTO(
            distributor_id=5,
            payment_method=PaymentMethod.PHONEPE,
            amount=Decimal("100.00"),
            receipt_image_url="https://cdn.example.com/r/1.jpg",
            actor=staff_actor,
        )

    async def test_records_payment_and_debits(
        self, mock_uow, mock_distributor_repo, mock_payment_repo, command
    ):
        use_case = RecordPayment(mock_uow, mock_distributor_repo, mock_payment_repo)

        result = await use_case.execute(command)

        assert result.is_ok()
        assert result.value.payment_id == 77
        assert result.value.wallet_balance == Decimal("900.00")
        assert result.value.created_by.kind == ActorKind.STAFF
        payment = mock_payment_repo.create.call_args.args[0]
        assert payment.amount == Decimal("100.00")
        assert payment.created_by_id == 7
        mock_distributor_repo.decrement_balance_if_sufficient.assert_called_once_with(5, Decimal("100.00"))
        mock_uow.commit.assert_called_once()

    async def test_insufficient_funds_writes_nothing(
        self, mock_uow, mock_distributor_repo, mock_payment_repo, command
    ):
        mock_distributor_repo.decrement_balance_if_sufficient = AsyncMock(return_value=None)
        use_case = RecordPayment(mock_uow, mock_distributor_repo, mock_payment_repo)

        result = await use_case.execute(command)

        assert result.error.code == "INSUFFICIENT_FUNDS"
        mock_payment_repo.create.assert_not_called()

    async def test_payment_insert_failure_rolls_back_debit(
        self, mock_uow, mock_distributor_repo, mock_payment_repo, command
    ):
        mock_payment_repo.create = AsyncMock(side_effect=RuntimeError("constraint"))
        use_case = RecordPayment(mock_uow, mock_distributor_repo, mock_payment_repo)

        result = await use_case.execute(command)

        assert result.error.code == "PERSISTENCE_FAILURE"
        mock_uow.rollback.assert_called_once()
        mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
class TestListPayments:

    async def test_lists(self):
        repo = MagicMock()
        repo.list_payments = AsyncMock(
            return_value=[
                Payment(
                    id=1,
                    distributor_id=5,
                    payment_date=datetime(2024, 1, 2),
                    payment_method=PaymentMethod.CASH,
                    amount=Decimal("50.00"),
                    receipt_image_url="https://cdn.example.com/r/2.jpg",
                    created_by_kind=ActorKind.ADMIN,
                    created_by_id=1,
                    created_at=datetime(2024, 1, 2),
                )
            ]
        )

        result = await ListPayments(repo).execute(distributor_id=5)

        assert result.is_ok()
        assert result.value[0].payment_method == PaymentMethod.CASH
        repo.list_payments.assert_called_once_with(distributor_id=5, limit=50, offset=0)
