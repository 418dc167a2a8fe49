import asyncio
from datetime import date
from decimal import Decimal

import pytest

from hotel_booking.application.dtos import CreateBookingDTO
from hotel_booking.application.use_cases import SettlePaymentUseCase
from hotel_booking.application.use_cases.settle_payment import PAYMENT_UNAVAILABLE_MESSAGE
from hotel_booking.domain.entities import BookingPaymentStatus, BookingStatus
from hotel_booking.domain.errors import (
    BookingNotFoundError,
    InvalidStateError,
    UnauthorizedError,
    UpstreamTimeoutError,
)
from hotel_booking.infrastructure.circuit_breaker import build_payment_breaker
from hotel_booking.infrastructure.in_memory import ScriptedPaymentGateway
from hotel_booking.infrastructure.in_memory.payment_gateway import (
    PAYMENT_FAILURE_MESSAGE,
    PAYMENT_SUCCESS_MESSAGE,
)
from tests.conftest import OTHER_USER_ID, USER_ID


async def new_booking(create_booking) -> str:
    details = await create_booking.execute(
        CreateBookingDTO(
            user_id=USER_ID,
            room_id="room-x",
            check_in_date=date(2024, 3, 1),
            check_out_date=date(2024, 3, 4),
            guest_count=2,
        )
    )
    return details.booking.id


def settle_with(gateway, booking_repo, tx_manager, fake_clock, breaker=None, timeout=1.0):
    return SettlePaymentUseCase(
        booking_repo=booking_repo,
        payment_gateway=gateway,
        transaction_manager=tx_manager,
        clock=fake_clock,
        timeout_seconds=timeout,
        breaker=breaker,
    )


class TestSettlePayment:
    @pytest.mark.asyncio
    async def test_success_confirms_booking(self, create_booking, settle_payment, booking_repo):
        booking_id = await new_booking(create_booking)

        result = await settle_payment.execute(booking_id, USER_ID)

        assert result.success
        assert result.message == PAYMENT_SUCCESS_MESSAGE
        stored = await booking_repo.get(booking_id)
        assert (stored.status, stored.payment_status) == (BookingStatus.CONFIRMED, BookingPaymentStatus.PAID)

    @pytest.mark.asyncio
    async def test_failure_keeps_pending_and_can_retry(
        self, create_booking, booking_repo, tx_manager, fake_clock
    ):
        gateway = ScriptedPaymentGateway([False, True])
        use_case = settle_with(gateway, booking_repo, tx_manager, fake_clock)
        booking_id = await new_booking(create_booking)

        first = await use_case.execute(booking_id, USER_ID)
        assert not first.success
        assert first.message == PAYMENT_FAILURE_MESSAGE
        stored = await booking_repo.get(booking_id)
        assert (stored.status, stored.payment_status) == (BookingStatus.PENDING, BookingPaymentStatus.FAILED)

        second = await use_case.execute(booking_id, USER_ID)
        assert second.success
        assert second.booking.status == BookingStatus.CONFIRMED

    @pytest.mark.asyncio
    async def test_second_settlement_is_rejected(self, create_booking, settle_payment, booking_repo, payments):
        booking_id = await new_booking(create_booking)
        await settle_payment.execute(booking_id, USER_ID)

        with pytest.raises(InvalidStateError):
            await settle_payment.execute(booking_id, USER_ID)

        stored = await booking_repo.get(booking_id)
        assert stored.total_amount == Decimal("450")
        assert stored.status == BookingStatus.CONFIRMED
        assert len(payments.calls) == 1

    @pytest.mark.asyncio
    async def test_concurrent_duplicates_confirm_once(
        self, create_booking, booking_repo, tx_manager, fake_clock
    ):
        gateway = ScriptedPaymentGateway(delay_seconds=0.01)
        use_case = settle_with(gateway, booking_repo, tx_manager, fake_clock)
        booking_id = await new_booking(create_booking)

        results = await asyncio.gather(
            use_case.execute(booking_id, USER_ID),
            use_case.execute(booking_id, USER_ID),
            return_exceptions=True,
        )

        successes = [r for r in results if not isinstance(r, Exception)]
        errors = [r for r in results if isinstance(r, Exception)]
        assert len(successes) == 1
        assert len(errors) == 1
        assert isinstance(errors[0], InvalidStateError)
        stored = await booking_repo.get(booking_id)
        assert stored.status == BookingStatus.CONFIRMED
        assert len(gateway.calls) == 1

    @pytest.mark.asyncio
    async def test_duplicate_during_failed_charge_never_reaches_gateway(
        self, create_booking, booking_repo, tx_manager, fake_clock
    ):
        gateway = ScriptedPaymentGateway([False, True], delay_seconds=0.01)
        use_case = settle_with(gateway, booking_repo, tx_manager, fake_clock)
        booking_id = await new_booking(create_booking)

        first, duplicate = await asyncio.gather(
            use_case.execute(booking_id, USER_ID),
            use_case.execute(booking_id, USER_ID),
            return_exceptions=True,
        )

        assert not first.success
        assert isinstance(duplicate, InvalidStateError)
        assert len(gateway.calls) == 1
        stored = await booking_repo.get(booking_id)
        assert (stored.status, stored.payment_status) == (BookingStatus.PENDING, BookingPaymentStatus.FAILED)

        retry = await use_case.execute(booking_id, USER_ID)
        assert retry.success
        assert len(gateway.calls) == 2

    @pytest.mark.asyncio
    async def test_gateway_error_releases_claim(self, create_booking, booking_repo, tx_manager, fake_clock):
        gateway = ScriptedPaymentGateway([RuntimeError("gateway down")])
        use_case = settle_with(gateway, booking_repo, tx_manager, fake_clock)
        booking_id = await new_booking(create_booking)

        with pytest.raises(RuntimeError):
            await use_case.execute(booking_id, USER_ID)

        stored = await booking_repo.get(booking_id)
        assert (stored.status, stored.payment_status) == (BookingStatus.PENDING, BookingPaymentStatus.FAILED)
        assert (await use_case.execute(booking_id, USER_ID)).success

    @pytest.mark.asyncio
    async def test_timeout_persists_failure_and_raises(
        self, create_booking, booking_repo, tx_manager, fake_clock
    ):
        gateway = ScriptedPaymentGateway(delay_seconds=0.5)
        use_case = settle_with(gateway, booking_repo, tx_manager, fake_clock, timeout=0.01)
        booking_id = await new_booking(create_booking)

        with pytest.raises(UpstreamTimeoutError) as exc_info:
            await use_case.execute(booking_id, USER_ID)

        assert exc_info.value.code == "UPSTREAM_TIMEOUT"
        stored = await booking_repo.get(booking_id)
        assert (stored.status, stored.payment_status) == (BookingStatus.PENDING, BookingPaymentStatus.FAILED)

    @pytest.mark.asyncio
    async def test_timeout_that_opens_circuit_still_raises_timeout(
        self, create_booking, booking_repo, tx_manager, fake_clock
    ):
        breaker = build_payment_breaker(fail_max=1)
        gateway = ScriptedPaymentGateway(delay_seconds=0.2)
        use_case = settle_with(gateway, booking_repo, tx_manager, fake_clock, breaker=breaker, timeout=0.01)
        booking_id = await new_booking(create_booking)

        with pytest.raises(UpstreamTimeoutError):
            await use_case.execute(booking_id, USER_ID)

        assert breaker.current_state == "open"
        stored = await booking_repo.get(booking_id)
        assert (stored.status, stored.payment_status) == (BookingStatus.PENDING, BookingPaymentStatus.FAILED)

    @pytest.mark.asyncio
    async def test_open_circuit_fails_fast(
        self, create_booking, booking_repo, tx_manager, fake_clock, breaker
    ):
        gateway = ScriptedPaymentGateway()
        use_case = settle_with(gateway, booking_repo, tx_manager, fake_clock, breaker=breaker)
        booking_id = await new_booking(create_booking)
        breaker.open()

        result = await use_case.execute(booking_id, USER_ID)

        assert not result.success
        assert result.message == PAYMENT_UNAVAILABLE_MESSAGE
        assert gateway.calls == []
        stored = await booking_repo.get(booking_id)
        assert stored.payment_status == BookingPaymentStatus.FAILED

    @pytest.mark.asyncio
    async def test_declined_payments_do_not_open_circuit(
        self, create_booking, booking_repo, tx_manager, fake_clock, breaker
    ):
        gateway = ScriptedPaymentGateway([False] * 5)
        use_case = settle_with(gateway, booking_repo, tx_manager, fake_clock, breaker=breaker)
        booking_id = await new_booking(create_booking)

        for _ in range(5):
            result = await use_case.execute(booking_id, USER_ID)
            assert not result.success

        assert breaker.current_state == "closed"
        assert len(gateway.calls) == 5

    @pytest.mark.asyncio
    async def test_other_user_cannot_pay(self, create_booking, settle_payment, payments):
        booking_id = await new_booking(create_booking)
        with pytest.raises(UnauthorizedError):
            await settle_payment.execute(booking_id, OTHER_USER_ID)
        assert payments.calls == []

    @pytest.mark.asyncio
    async def test_unknown_booking(self, settle_payment):
        with pytest.raises(BookingNotFoundError):
            await settle_payment.execute("bk-missing", USER_ID)
