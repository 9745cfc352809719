"""Student booking checkout and payment verification."""
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from tutorhub.core.security import get_current_student
from tutorhub.interfaces.http.deps import get_db_session, get_payment_gateway
from tutorhub.interfaces.http.serializers import booking_to_response
from tutorhub.modules.accounts import Account as AccountDomain
from tutorhub.modules.bookings import (
    BookingAlreadyExistsError,
    BookingAlreadySettledError,
    BookingNotFoundError,
    BookingService,
    FacultyNotFoundError,
    InvalidBookingError,
    InvalidPaymentSignatureError,
    PaymentGateway,
    PaymentGatewayError,
)
from tutorhub.schemas import (
    BookingCreateRequest,
    BookingListResponse,
    BookingResponse,
    CheckoutResponse,
    FreeBookingRequest,
    FreeBookingResponse,
    PaymentVerifyRequest,
)

router = APIRouter()


@router.post("", response_model=CheckoutResponse, status_code=status.HTTP_201_CREATED)
async def create_booking(
    payload: BookingCreateRequest,
    student: AccountDomain = Depends(get_current_student),
    db: AsyncSession = Depends(get_db_session),
    gateway: PaymentGateway = Depends(get_payment_gateway),
) -> CheckoutResponse:
    booking_service = BookingService.with_session(db, gateway)
    try:
        checkout = await booking_service.create_booking(
            student_id=student.id,
            faculty_id=payload.faculty_id,
            topic=payload.topic,
            price=payload.price,
            currency=payload.currency,
        )
    except InvalidBookingError as exc:
        await db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except FacultyNotFoundError as exc:
        await db.rollback()
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Faculty not found") from exc
    except PaymentGatewayError as exc:
        await db.rollback()
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc

    await db.commit()
    booking = checkout.booking
    return CheckoutResponse(
        booking=booking_to_response(booking),
        order_id=booking.gateway_order_id,
        amount=booking.price_cents,
        currency=booking.currency,
        key_id=checkout.gateway_key_id,
    )


@router.post("/create-free", response_model=FreeBookingResponse, status_code=status.HTTP_201_CREATED)
async def create_free_booking(
    payload: FreeBookingRequest,
    student: AccountDomain = Depends(get_current_student),
    db: AsyncSession = Depends(get_db_session),
    gateway: PaymentGateway = Depends(get_payment_gateway),
) -> FreeBookingResponse:
    booking_service = BookingService.with_session(db, gateway)
    try:
        booking = await booking_service.create_free_booking(
            student_id=student.id,
            faculty_id=payload.faculty_id,
            topic=payload.topic,
            currency=payload.currency,
        )
    except (InvalidBookingError, BookingAlreadyExistsError) as exc:
        await db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except FacultyNotFoundError as exc:
        await db.rollback()
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Faculty not found") from exc

    await db.commit()
    return FreeBookingResponse(message="Booking confirmed successfully!", booking=booking_to_response(booking))


@router.post("/verify", response_model=BookingResponse)
async def verify_payment(
    payload: PaymentVerifyRequest,
    student: AccountDomain = Depends(get_current_student),
    db: AsyncSession = Depends(get_db_session),
    gateway: PaymentGateway = Depends(get_payment_gateway),
) -> BookingResponse:
    booking_service = BookingService.with_session(db, gateway)
    try:
        booking = await booking_service.verify_payment(
            order_id=payload.order_id,
            payment_id=payload.payment_id,
            signature=payload.signature,
            student_id=student.id,
        )
    except BookingNotFoundError as exc:
        await db.rollback()
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Booking not found") from exc
    except BookingAlreadySettledError as exc:
        await db.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Booking already settled") from exc
    except InvalidPaymentSignatureError as exc:
        await db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid payment signature") from exc

    await db.commit()
    return booking_to_response(booking)


@router.get("", response_model=BookingListResponse)
async def list_bookings(
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    student: AccountDomain = Depends(get_current_student),
    db: AsyncSession = Depends(get_db_session),
    gateway: PaymentGateway = Depends(get_payment_gateway),
) -> BookingListResponse:
    booking_service = BookingService.with_session(db, gateway)
    bookings = await booking_service.list_for_student(student.id, limit=limit, offset=offset)
    return BookingListResponse(bookings=[booking_to_response(booking) for booking in bookings])
