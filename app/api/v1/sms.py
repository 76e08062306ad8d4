from fastapi import APIRouter, Depends, Request

from app.api.deps import get_sms_verification_service
from app.schemas.sms import SmsSendRequest, SmsSendResponse, SmsVerifyRequest, SmsVerifyResponse
from app.services.sms_verification_service import SmsVerificationService

router = APIRouter()

@router.post(
    "/send",
    response_model=SmsSendResponse,
    responses={
        429: {"description": "Too many attempts"},
        500: {"description": "SMS service is not configured"},
    },
)
async def send_code(
    payload: SmsSendRequest,
    request: Request,
    service: SmsVerificationService = Depends(get_sms_verification_service)
):
    client_ip = request.client.host if request.client else "unknown"
    await service.request_code(payload.phone, client_ip)
    return SmsSendResponse(message="Verification code sent.")

@router.post(
    "/verify",
    response_model=SmsVerifyResponse,
    responses={422: {"description": "Invalid or expired code"}},
)
async def verify_code(
    payload: SmsVerifyRequest,
    service: SmsVerificationService = Depends(get_sms_verification_service)
):
    verified_at = await service.verify_code(payload.phone, payload.sms_code)
    return SmsVerifyResponse(message="Phone verified.", verified_at=verified_at)
